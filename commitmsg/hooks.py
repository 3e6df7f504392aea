"""Installing the git hook script, and upgrading it when an older one calls us."""
import logging as log
import os
import re


HOOK_NAME = 'commit-msg'
HOOK_VERSION = 1

HOOK_TEMPLATE = '''#!/bin/sh
# Installed by "commit-msg install"; adds Change-Id and Co-developed-by trailers.
COMMIT_MSG_HOOK_VERSION={version}
COMMIT_MSG_HOOK_PATH="$0"
export COMMIT_MSG_HOOK_VERSION COMMIT_MSG_HOOK_PATH

exec commit-msg exec "$1"
'''

_VERSION_RE = re.compile(r'COMMIT_MSG_HOOK_VERSION=(\d+)')


def hook_script(version=HOOK_VERSION):
    return HOOK_TEMPLATE.format(version=version)


def template_version(script):
    match = _VERSION_RE.search(script)
    return int(match.group(1)) if match else None


def write_hook(hook_path, script):
    with open(hook_path, 'w') as hook_file:
        hook_file.write(script)
    os.chmod(hook_path, 0o755)


def install(repo):
    hooks_dir = repo.get_hooks_dir()
    if hooks_dir is None:
        raise HookInstallError('Not in a git repository')

    if not os.path.isabs(hooks_dir) and repo.local_path:
        hooks_dir = os.path.join(repo.local_path, hooks_dir)
    os.makedirs(hooks_dir, exist_ok=True)

    hook_path = os.path.join(hooks_dir, HOOK_NAME)
    write_hook(hook_path, hook_script())
    log.info('Installed %s hook at %s', HOOK_NAME, hook_path)
    return hook_path


def upgrade_if_outdated(env, script=None):
    """Rewrite the hook that invoked us if it is older than the current template.

    The hook exports its own path and version; if we weren't run from it there is
    nothing to do. Failures are only logged, they must not stop the commit.
    """
    hook_path = env.get('COMMIT_MSG_HOOK_PATH')
    if not hook_path:
        return False

    script = script or hook_script()
    try:
        installed_version = int(env.get('COMMIT_MSG_HOOK_VERSION') or 0)
    except ValueError:
        installed_version = 0

    current_version = template_version(script)
    if current_version is None:
        log.warning('Could not determine current hook version from template')
        return False

    if installed_version >= current_version:
        return False

    try:
        write_hook(hook_path, script)
    except OSError as err:
        log.warning('Failed to check/upgrade hook: %s', err)
        return False

    log.info('Hook upgraded from version %s to version %s at %s', installed_version, current_version, hook_path)
    return True


class HookInstallError(Exception):
    pass
