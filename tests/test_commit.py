import pytest

from commitmsg.commit import is_merge_commit, is_temporary_commit

from tests.git_repo_mock import RepoMock


EDIT_MSG = '/repo/.git/COMMIT_EDITMSG'


class TestIsMergeCommit(object):

    def test_merge_msg_file(self):
        repo = RepoMock.create()
        assert is_merge_commit('/repo/.git/MERGE_MSG', repo)
        assert repo.calls == []

    def test_amending_a_merge_commit(self):
        repo = RepoMock.create(head_tree='t1', staged_tree='t1', parents=['p1', 'p2'])
        assert is_merge_commit(EDIT_MSG, repo)
        assert repo.calls == ['rev-parse HEAD^{tree}', 'write-tree', 'rev-parse HEAD^@']

    def test_amending_an_octopus_merge(self):
        repo = RepoMock.create(head_tree='t1', staged_tree='t1', parents=['p1', 'p2', 'p3'])
        assert is_merge_commit(EDIT_MSG, repo)

    def test_amending_a_regular_commit(self):
        repo = RepoMock.create(head_tree='t1', staged_tree='t1', parents=['p1'])
        assert not is_merge_commit(EDIT_MSG, repo)

    def test_new_changes_staged(self):
        repo = RepoMock.create(head_tree='t1', staged_tree='t2', parents=['p1', 'p2'])
        assert not is_merge_commit(EDIT_MSG, repo)
        assert 'rev-parse HEAD^@' not in repo.calls

    def test_no_head_yet(self):
        repo = RepoMock.create(staged_tree='t1')
        assert not is_merge_commit(EDIT_MSG, repo)
        assert repo.calls == ['rev-parse HEAD^{tree}']

    def test_write_tree_fails(self):
        repo = RepoMock.create(head_tree='t1', parents=['p1', 'p2'])
        assert not is_merge_commit(EDIT_MSG, repo)

    def test_parents_unknown(self):
        repo = RepoMock.create(head_tree='t1', staged_tree='t1')
        assert not is_merge_commit(EDIT_MSG, repo)


class TestIsTemporaryCommit(object):

    @pytest.mark.parametrize('message', [
        'fixup! feat: x',
        'squash! feat: x\n\nmore words',
        '  fixup! feat: x',
    ])
    def test_temporary(self, message):
        assert is_temporary_commit(message)

    @pytest.mark.parametrize('message', [
        'feat: x',
        'feat: x\n\nfixup! later',
        'Fixup! feat: x',
        'amend! feat: x',
    ])
    def test_not_temporary(self, message):
        assert not is_temporary_commit(message)
