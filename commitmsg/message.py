import re
import string
from collections import namedtuple


DIFF_MARKER = 'diff --git '
SCISSORS = ('>8', '8<')

_CHANGE_ID_RE = re.compile(r'^Change-Id: I[a-f0-9]+\s*$')


class Rewrite(namedtuple('Rewrite', 'message should_save')):
    """A (possibly) rewritten commit message and whether it needs writing back."""


def _is_scissors(line, comment_char):
    #   # ------------------------ >8 ------------------------
    return line[len(comment_char):].strip(string.whitespace + '-') in SCISSORS


def clean_commit_message(message, comment_char='#'):
    """Strip what git would strip (comments, diffs below the scissors) and tidy up blank lines.

    The result is empty when nothing but Signed-off-by lines is left, so that git
    aborts the commit as it would for an empty message. `should_save` is set if the
    cleaned message has to be written back even when no trailer gets added, i.e. when
    a blank line had to be inserted after the subject.
    """
    lines = []
    last_line_was_empty = True

    for line in message.split('\n'):
        if line.startswith(DIFF_MARKER):
            break

        if line.startswith(comment_char):
            if _is_scissors(line, comment_char):
                break
            continue

        line = line.rstrip()
        if not line:
            if not last_line_was_empty:
                lines.append(line)
                last_line_was_empty = True
            continue

        lines.append(line)
        last_line_was_empty = False

    while lines and not lines[-1]:
        del lines[-1]

    if all(not line or line.strip().lower().startswith('signed-off-by:') for line in lines):
        return Rewrite('', False)

    should_save = False
    if len(lines) >= 2 and lines[1]:
        lines.insert(1, '')
        should_save = True

    return Rewrite('\n'.join(lines), should_save)


def subject(message):
    return message.split('\n', 1)[0].strip()


def has_change_id(message):
    return any(_CHANGE_ID_RE.match(line) for line in message.split('\n'))


def has_co_developed_by(message):
    return any(line.lower().startswith('co-developed-by:') for line in message.split('\n'))
