import logging as log
import os.path
from collections import namedtuple

from . import ai_tools
from . import change_id as change_id_module
from . import commit
from . import message as message_module
from . import trailers
from .message import Rewrite


class RewriteDecision(namedtuple('RewriteDecision', 'change_id co_developed_by should_save')):
    """What to add to a cleaned message: trailer values (or `None`), and whether to save."""
    __slots__ = ()

    @property
    def adds_trailers(self):
        return bool(self.change_id or self.co_developed_by)


class CommitMsgJob:

    def __init__(self, *, repo, config, env, tools=ai_tools.ALL_TOOLS):
        self._repo = repo
        self._config = config
        self._env = env
        self._tools = tools

    @property
    def repo(self):
        return self._repo

    @property
    def config(self):
        return self._config

    def execute(self, message_file):
        """Rewrite `message_file` in place, if there is anything to add to it."""
        log.info('Executing commit-msg hook on file: %s', message_file)

        if not os.path.exists(message_file):
            raise HookError('Commit message file not found: {}'.format(message_file))

        try:
            if commit.is_merge_commit(message_file, self._repo):
                log.info('Merge commit detected, skipping commit-msg hook processing.')
                return False

            with open(message_file, encoding='utf-8') as message_fd:
                content = message_fd.read()

            rewrite = self.process(content)

            if rewrite.should_save:
                with open(message_file, 'w', encoding='utf-8') as message_fd:
                    message_fd.write(rewrite.message)
                log.info('Commit message processed and saved successfully!')
            else:
                log.info('Commit message processed, no changes needed.')
        except Exception as err:  # pylint: disable=broad-except
            raise HookError('Error processing commit message: {}'.format(err)) from err

        return rewrite.should_save

    def process(self, content):
        # An empty message makes git abort the commit; leave it to git
        if not content.strip():
            return Rewrite('', False)

        cleaned = message_module.clean_commit_message(content, self._config.comment_char)
        if not cleaned.message.strip():
            return Rewrite('', False)

        decision = self.plan(cleaned)
        if not decision.adds_trailers:
            return Rewrite(cleaned.message, decision.should_save)

        return Rewrite(
            trailers.insert_trailers(
                cleaned.message,
                change_id=decision.change_id,
                co_developed_by=decision.co_developed_by,
            ),
            decision.should_save,
        )

    def plan(self, cleaned):
        message = cleaned.message
        temporary = commit.is_temporary_commit(message)

        change_id = None
        if not self._config.create_change_id:
            log.info('Change-Id generation disabled by configuration')
        elif temporary:
            log.info('Temporary commit detected, skipping Change-Id generation')
        elif message_module.has_change_id(message):
            log.info('Change-Id already exists, skipping generation')
        else:
            change_id = change_id_module.generate_change_id(message, self._repo)

        co_developed_by = None
        if not self._config.create_co_developed_by:
            log.info('Co-developed-by generation disabled by configuration')
        elif temporary:
            log.info('Temporary commit detected, skipping Co-developed-by generation')
        elif message_module.has_co_developed_by(message):
            log.info('Co-developed-by already exists, skipping generation')
        else:
            co_developed_by = ai_tools.get_co_developed_by(self._env, self._tools) or None

        adds_trailers = bool(change_id or co_developed_by)
        return RewriteDecision(
            change_id=change_id,
            co_developed_by=co_developed_by,
            should_save=adds_trailers or cleaned.should_save,
        )


class HookError(Exception):
    pass
