"""Gerrit-style Change-Id generation.

The id is the hash of the commit object git would create for the message, as in
Gerrit's own commit-msg hook. Without git we still produce one, see `fallback_change_id`.
"""
import logging as log
import time
from datetime import datetime

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
FALLBACK_HEX_LENGTH = 32

UNKNOWN_IDENT = 'Unknown <unknown@example.com>'


def _timezone_offset(now):
    return datetime.fromtimestamp(now).astimezone().strftime('%z')


def change_id_input(message, repo, now=None):
    """Return the commit object to hash, or `None` if there is no tree to hash."""
    if now is None:
        now = time.time()
    fallback_ident = '{} {} {}'.format(UNKNOWN_IDENT, int(now), _timezone_offset(now))

    tree = repo.write_tree()
    if tree is None:
        return None
    parent = repo.get_head_commit()
    author = repo.get_ident('GIT_AUTHOR_IDENT') or fallback_ident
    committer = repo.get_ident('GIT_COMMITTER_IDENT') or fallback_ident

    lines = ['tree ' + tree]
    if parent:
        lines.append('parent ' + parent)
    lines.append('author ' + author)
    lines.append('committer ' + committer)
    return '\n'.join(lines) + '\n\n' + message


def fallback_change_id(message, now=None):
    """A 32 hex digit id from a FNV-1a hash of the message and the current time."""
    if now is None:
        now = time.time()
    content = '{}\n{}\n'.format(message, int(now * 1000))

    value = FNV_OFFSET_BASIS
    for char in content:
        value ^= ord(char)
        value = (value * FNV_PRIME) & 0xffffffff

    return 'I' + '{:0{width}x}'.format(value, width=FALLBACK_HEX_LENGTH)[:FALLBACK_HEX_LENGTH]


def generate_change_id(message, repo, now=None):
    commit_object = change_id_input(message, repo, now=now)
    object_hash = repo.hash_commit_object(commit_object) if commit_object is not None else None
    if object_hash:
        return 'I' + object_hash

    log.warning('Could not use git hash-object, using fallback hash generation')
    return fallback_change_id(message, now=now)
