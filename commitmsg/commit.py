import logging as log
import os.path

from . import message as message_module


MERGE_MESSAGE_FILE = 'MERGE_MSG'
TEMPORARY_PREFIXES = ('fixup!', 'squash!')


def is_merge_commit(message_file, repo):
    """Whether the commit being made (or amended) is a merge commit.

    Editing .git/MERGE_MSG means we are concluding a merge. Otherwise, if nothing new is
    staged we may be amending HEAD (or making an empty commit), so look at how many parents
    HEAD has. If git can't tell us, assume it's not a merge: a brand new repo has no HEAD.
    """
    if os.path.basename(message_file) == MERGE_MESSAGE_FILE:
        return True

    head_tree = repo.get_head_tree()
    if head_tree is None:
        return False

    staged_tree = repo.write_tree()
    if staged_tree is None:
        log.warning('Could not determine if this is a merge commit, assuming not')
        return False

    if staged_tree != head_tree:
        return False

    parents = repo.get_parent_hashes()
    return parents is not None and len(parents) >= 2


def is_temporary_commit(message):
    """fixup!/squash! commits are going to be folded away by `git rebase --autosquash`."""
    return message_module.subject(message).startswith(TEMPORARY_PREFIXES)
