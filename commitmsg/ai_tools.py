"""AI coding tools we can recognise from the environment they run git in.

Each tool lists environment variables (and the value pattern they must have) that it
sets for the processes it spawns. The first tool with a matching variable is credited
with a `Co-developed-by:` trailer. CLI tools come first since they are often run from
inside an IDE terminal, where the IDE's variables are set as well.
"""
import fnmatch
from collections import namedtuple
from enum import IntEnum, unique


@unique
class ToolKind(IntEnum):
    cli = 1
    plugin = 2
    ide = 3
    others = 4


# `pattern` is a shell glob; '*' means "set to anything truthy"
EnvVar = namedtuple('EnvVar', 'key pattern')

ANY_VALUE = '*'
FALSY_VALUES = ('0', 'false', 'off', 'no')


class ToolConfig(namedtuple('ToolConfig', 'kind name email env_vars')):

    @property
    def co_developed_by(self):
        return '{0.name} <{0.email}>'.format(self)


_DECLARED_TOOLS = (
    ToolConfig(
        kind=ToolKind.ide,
        name='Antigravity',
        email='noreply@antigravity.google',
        env_vars=(
            EnvVar('__CFBundleIdentifier', 'com.google.antigravity'),
            EnvVar('ANTIGRAVITY_AGENT', '1'),
        ),
    ),
    ToolConfig(
        kind=ToolKind.cli,
        name='Claude',
        email='noreply@anthropic.com',
        env_vars=(
            EnvVar('CLAUDECODE', '1'),
        ),
    ),
    ToolConfig(
        kind=ToolKind.cli,
        name='Codex',
        email='noreply@openai.com',
        env_vars=(
            EnvVar('CODEX_SANDBOX', ANY_VALUE),
            EnvVar('CODEX_MANAGED_BY_NPM', ANY_VALUE),
        ),
    ),
    ToolConfig(
        kind=ToolKind.cli,
        name='iFlow',
        email='noreply@iflow.cn',
        env_vars=(
            EnvVar('IFLOW_CLI', ANY_VALUE),
        ),
    ),
    ToolConfig(
        kind=ToolKind.cli,
        name='OpenCode',
        email='noreply@opencode.ai',
        env_vars=(
            EnvVar('OPENCODE', ANY_VALUE),
        ),
    ),
    ToolConfig(
        kind=ToolKind.cli,
        name='Qwen-Coder',
        email='noreply@qwen.ai',
        env_vars=(
            EnvVar('QWEN_CODE', ANY_VALUE),
        ),
    ),
    ToolConfig(
        kind=ToolKind.cli,
        name='Gemini',
        email='noreply@google.com',
        env_vars=(
            EnvVar('GEMINI_CLI', ANY_VALUE),
        ),
    ),
    ToolConfig(
        kind=ToolKind.cli,
        name='Qoder CLI',
        email='noreply@qoder.com',
        env_vars=(
            EnvVar('QODER_CLI', ANY_VALUE),
        ),
    ),
    ToolConfig(
        kind=ToolKind.ide,
        name='Cursor',
        email='cursoragent@cursor.com',
        env_vars=(
            EnvVar('CURSOR_AGENT', ANY_VALUE),
            EnvVar('__CFBundleIdentifier', 'com.todesktop.*'),
        ),
    ),
    ToolConfig(
        kind=ToolKind.ide,
        name='Kiro',
        email='noreply@kiro.dev',
        env_vars=(
            EnvVar('__CFBundleIdentifier', 'dev.kiro.*'),
            EnvVar('TERM_PROGRAM', 'kiro'),
        ),
    ),
    ToolConfig(
        kind=ToolKind.ide,
        name='Qoder',
        email='noreply@qoder.com',
        env_vars=(
            EnvVar('__CFBundleIdentifier', 'com.qoder.*'),
        ),
    ),
)

# sorted() is stable: tools of the same kind keep their declaration order
ALL_TOOLS = tuple(sorted(_DECLARED_TOOLS, key=lambda tool: tool.kind))


def env_var_matches(env_var, value):
    if env_var.pattern == ANY_VALUE:
        return bool(value) and value not in FALSY_VALUES
    return fnmatch.fnmatchcase(value, env_var.pattern)


def find_tool(env, tools=ALL_TOOLS):
    """Return the first tool one of whose environment variables matches `env`, or `None`."""
    for tool in tools:
        for env_var in tool.env_vars:
            value = env.get(env_var.key)
            if value is None:
                continue
            if env_var_matches(env_var, value):
                return tool
    return None


def get_co_developed_by(env, tools=ALL_TOOLS):
    """The `Co-developed-by:` value for the tool running us, '' if there is none."""
    tool = find_tool(env, tools)
    return tool.co_developed_by if tool is not None else ''


def configs_to_legacy_format(tools=ALL_TOOLS):
    """[('KEY=pattern', 'Name <email>'), ...] for every tool and variable, in priority order."""
    return [
        ('{0.key}={0.pattern}'.format(env_var), tool.co_developed_by)
        for tool in tools
        for env_var in tool.env_vars
    ]
