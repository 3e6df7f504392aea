import logging as log
from collections import namedtuple


CHANGE_ID_KEYS = ('gerrit.createchangeid', 'commit-msg.changeid', 'commitmsg.changeid')
CO_DEVELOPED_BY_KEYS = ('commit-msg.codevelopedby', 'commitmsg.codevelopedby')
COMMENT_CHAR_KEY = 'core.commentchar'

TRUTHY_VALUES = ('true', 'yes', 'on', '1')


def string_to_bool(value):
    return value.lower() in TRUTHY_VALUES


class HookConfig(namedtuple('HookConfig', 'create_change_id create_co_developed_by comment_char')):
    __slots__ = ()

    @classmethod
    def default(cls, *, create_change_id=True, create_co_developed_by=True, comment_char='#'):
        return cls(
            create_change_id=create_change_id,
            create_co_developed_by=create_co_developed_by,
            comment_char=comment_char,
        )

    @classmethod
    def from_config_lines(cls, lines):
        """Build a config from `git config --list` output lines ("key=value")."""
        settings = {}
        for line in lines:
            key, sep, value = line.partition('=')
            if not sep:
                continue
            key = key.lower()

            if key in CHANGE_ID_KEYS:
                settings['create_change_id'] = string_to_bool(value)
            elif key == COMMENT_CHAR_KEY and value:
                settings['comment_char'] = value
            elif key in CO_DEVELOPED_BY_KEYS:
                settings['create_co_developed_by'] = string_to_bool(value)

        return cls.default(**settings)

    @classmethod
    def from_git(cls, repo):
        lines = repo.config_list()
        if lines is None:
            log.warning('Could not read git configuration, using defaults')
            return cls.default()
        return cls.from_config_lines(lines)
