"""
A git commit-msg hook adding Change-Id and Co-developed-by trailers to commit messages
"""

import logging
import os
import re
import sys
from datetime import timedelta

import configargparse

from . import config as config_module
from . import git
from . import hooks
from . import job


DEBUG_MODE_TEST = 'DEBUG_MODE_TEST'


class CommitMsgCliArgError(Exception):
    pass


def time_interval(str_interval):
    try:
        quant, unit = re.match(r'\A([\d.]+) ?(h|m(?:in)?|s)?\Z', str_interval).groups()
        translate = {'h': 'hours', 'm': 'minutes', 'min': 'minutes', 's': 'seconds'}
        return timedelta(**{translate[unit or 's']: float(quant)})
    except (AttributeError, ValueError):
        raise configargparse.ArgumentTypeError('Invalid time interval (e.g. 12[s|min|h]): %s' % str_interval)


def _parse_config(args):
    parser = configargparse.ArgParser(
        auto_env_var_prefix='COMMIT_MSG_',
        ignore_unknown_config_file_keys=True,  # Don't parse unknown args
        config_file_parser_class=configargparse.YAMLConfigFileParser,
        formatter_class=configargparse.ArgumentDefaultsRawHelpFormatter,
        description=__doc__,
    )
    parser.add_argument(
        '--config-file',
        env_var='COMMIT_MSG_CONFIG_FILE',
        type=str,
        is_config_file=True,
        help='config file path',
    )
    parser.add_argument(
        'command',
        choices=('exec', 'install'),
        help=(
            'exec: process the commit message file (run by the hook).\n'
            'install: install the commit-msg hook in the current repository.\n'
        ),
    )
    parser.add_argument(
        'message_file',
        nargs='?',
        metavar='MESSAGE_FILE',
        help='The commit message file git passes to the hook.\n',
    )
    parser.add_argument(
        '--git-timeout',
        type=time_interval,
        default='120s',
        help='How long a single git operation can take.\n'
    )
    parser.add_argument(
        '--repo',
        type=str,
        default=None,
        metavar='PATH',
        help='Repository to run git in (default: the current directory).\n',
    )
    parser.add_argument(
        '--debug',
        action='store_true',
        help='Debug logging (includes all git commands).\n',
    )
    config = parser.parse_args(args)

    if config.command == 'exec' and not config.message_file:
        raise CommitMsgCliArgError('exec needs the commit message file')
    return config


def main(args=None, env=None):
    if args is None:
        args = sys.argv[1:]
    if env is None:
        env = dict(os.environ)
    logging.basicConfig(format='%(message)s')

    options = _parse_config(args)

    if options.debug:
        logging.getLogger().setLevel(logging.DEBUG)
    else:
        logging.getLogger().setLevel(logging.INFO)

    repo = git.Repo(local_path=options.repo, timeout=options.git_timeout)

    if options.command == 'install':
        hooks.install(repo)
        return

    if options.message_file == DEBUG_MODE_TEST:
        logging.info('Debug mode: exiting without processing')
        return

    hooks.upgrade_if_outdated(env)

    hook_config = config_module.HookConfig.from_git(repo)
    commit_msg_job = job.CommitMsgJob(repo=repo, config=hook_config, env=env)
    commit_msg_job.execute(options.message_file)
