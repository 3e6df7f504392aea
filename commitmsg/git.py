import logging as log
import shlex
import sys
import subprocess
from subprocess import PIPE, TimeoutExpired

from collections import namedtuple


class Repo(namedtuple('Repo', 'local_path timeout')):
    """The repository the hook runs in.

    `local_path` may be `None`, in which case git runs in the current directory
    (which is what git does for hooks anyway).

    The `get_*`/`write_tree`/`hash_commit_object`/`config_list` queries never raise:
    a failing git call is logged and reported as `None`, so that callers can fall back
    to a default instead of aborting the commit.
    """

    def get_head_tree(self):
        return self._query('rev-parse', 'HEAD^{tree}')

    def write_tree(self):
        """Return the tree id of what is currently staged."""
        return self._query('write-tree')

    def get_parent_hashes(self):
        output = self._query('rev-parse', 'HEAD^@')
        if output is None:
            return None
        return [line for line in output.split('\n') if line]

    def get_head_commit(self):
        return self._query('rev-parse', 'HEAD^0')

    def get_ident(self, var_name):
        """`var_name` is one of GIT_AUTHOR_IDENT, GIT_COMMITTER_IDENT."""
        return self._query('var', var_name)

    def hash_commit_object(self, data):
        return self._query('hash-object', '-t', 'commit', '--stdin', stdin=data.encode('utf-8'))

    def config_list(self):
        output = self._query('config', '--list', '--includes')
        if output is None:
            return None
        return output.split('\n')

    def get_hooks_dir(self):
        return self._query('rev-parse', '--git-path', 'hooks')

    def _query(self, *args, stdin=None):
        try:
            result = self.git(*args, stdin=stdin)
        except GitError:
            return None
        except (OSError, TimeoutExpired) as err:
            log.warning('Could not run git %s: %s', ' '.join(args), err)
            return None
        return result.stdout.decode('utf-8').strip()

    def git(self, *args, stdin=None):
        command = ['git']
        if self.local_path:
            command.extend(['-C', self.local_path])
        command.extend([arg for arg in args if str(arg)])

        log.debug('Running %s', ' '.join(shlex.quote(w) for w in command))
        try:
            timeout_seconds = self.timeout.total_seconds() if self.timeout is not None else None
            return _run(*command, stdin=stdin, check=True, timeout=timeout_seconds)
        except subprocess.CalledProcessError as err:
            log.warning('git returned %s', err.returncode)
            log.debug('stdout: %r', err.stdout)
            log.debug('stderr: %r', err.stderr)
            raise GitError(err)


def _run(*args, stdin=None, check=False, timeout=None):
    encoded_args = [a.encode('utf-8') for a in args] if sys.platform != 'win32' else args
    with subprocess.Popen(encoded_args, stdin=PIPE, stdout=PIPE, stderr=PIPE) as process:
        try:
            stdout, stderr = process.communicate(stdin, timeout=timeout)
        except TimeoutExpired:
            process.kill()
            stdout, stderr = process.communicate()
            raise TimeoutExpired(
                process.args, timeout, output=stdout, stderr=stderr,
            )
        except Exception:
            process.kill()
            process.wait()
            raise
        retcode = process.poll()
        if check and retcode:
            raise subprocess.CalledProcessError(
                retcode, process.args, output=stdout, stderr=stderr,
            )
        return subprocess.CompletedProcess(process.args, retcode, stdout, stderr)


class GitError(Exception):
    pass
