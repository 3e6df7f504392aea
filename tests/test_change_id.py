import re

from commitmsg.change_id import (
    change_id_input,
    fallback_change_id,
    generate_change_id,
)

from tests.git_repo_mock import RepoMock


NOW = 1700000000.25
AUTHOR = 'Bart Simpson <bart@example.com> 1700000000 +0000'
COMMITTER = 'Lisa Simpson <lisa@example.com> 1700000000 +0000'
OBJECT_HASH = '0123456789abcdef0123456789abcdef01234567'


class TestChangeIdInput(object):

    def test_with_parent(self):
        repo = RepoMock.create(staged_tree='tree1', head='head1', author=AUTHOR, committer=COMMITTER)
        assert change_id_input('feat: x\n\nbody', repo, now=NOW) == (
            'tree tree1\n'
            'parent head1\n'
            'author ' + AUTHOR + '\n'
            'committer ' + COMMITTER + '\n'
            '\n'
            'feat: x\n\nbody'
        )

    def test_root_commit_has_no_parent_line(self):
        repo = RepoMock.create(staged_tree='tree1', author=AUTHOR, committer=COMMITTER)
        assert change_id_input('feat: x', repo, now=NOW) == (
            'tree tree1\nauthor ' + AUTHOR + '\ncommitter ' + COMMITTER + '\n\nfeat: x'
        )

    def test_unknown_identities(self):
        repo = RepoMock.create(staged_tree='tree1')
        result = change_id_input('feat: x', repo, now=NOW)
        assert re.match(
            r'\Atree tree1\n'
            r'author Unknown <unknown@example.com> 1700000000 [+-]\d{4}\n'
            r'committer Unknown <unknown@example.com> 1700000000 [+-]\d{4}\n'
            r'\nfeat: x\Z',
            result,
        )

    def test_no_tree(self):
        assert change_id_input('feat: x', RepoMock.create(), now=NOW) is None


class TestGenerateChangeId(object):

    def test_hashes_commit_object(self):
        repo = RepoMock.create(
            staged_tree='tree1', head='head1', author=AUTHOR, committer=COMMITTER, object_hash=OBJECT_HASH,
        )
        assert generate_change_id('feat: x', repo, now=NOW) == 'I' + OBJECT_HASH
        assert repo.stdins == [change_id_input('feat: x', repo, now=NOW)]

    def test_falls_back_without_git(self):
        change_id = generate_change_id('feat: x', RepoMock.create(), now=NOW)
        assert change_id == fallback_change_id('feat: x', now=NOW)

    def test_falls_back_when_hash_object_fails(self):
        repo = RepoMock.create(staged_tree='tree1', author=AUTHOR, committer=COMMITTER)
        assert generate_change_id('feat: x', repo, now=NOW) == fallback_change_id('feat: x', now=NOW)


class TestFallbackChangeId(object):

    def test_shape(self):
        assert re.match(r'\AI[0-9a-f]{32}\Z', fallback_change_id('feat: x', now=NOW))

    def test_deterministic_for_the_same_time(self):
        assert fallback_change_id('feat: x', now=NOW) == fallback_change_id('feat: x', now=NOW)

    def test_depends_on_message_and_time(self):
        assert fallback_change_id('feat: x', now=NOW) != fallback_change_id('feat: y', now=NOW)
        assert fallback_change_id('feat: x', now=NOW) != fallback_change_id('feat: x', now=NOW + 1)

    def test_fnv1a(self):
        # FNV-1a of 'x\n1700000000250\n'
        value = 2166136261
        for char in 'x\n1700000000250\n':
            value = ((value ^ ord(char)) * 16777619) % 2 ** 32
        assert fallback_change_id('x', now=NOW) == 'I' + format(value, '032x')
