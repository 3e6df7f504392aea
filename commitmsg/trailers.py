"""Locating, deduplicating and inserting trailers at the end of a commit message.

A trailer is a `Token: value` line whose token contains at least one '-', so that
prose such as "Solution: use a bigger hammer" is not mistaken for one. Lines of the
form `[...]` or `(...)` (e.g. "(cherry picked from commit ...)") are trailer comments:
they belong to the trailer block but are never the place new trailers go before.
"""
import re

TRAILER_RE = re.compile(r'^[a-zA-Z0-9]+-[a-zA-Z0-9-]{0,63}: ')
TRAILER_COMMENT_RES = (
    re.compile(r'^\[.+\]$'),
    re.compile(r'^\(.+\)$'),
)

_USER_INFO_RE = re.compile(r'^[a-zA-Z0-9-]+:\s*(.+)$')
_NAME_EMAIL_RE = re.compile(r'^(.+?)\s*<[^>]+>$')

# Trailers that name the same person as Co-developed-by and become redundant with it
DUPLICATE_TRAILER_PREFIXES = ('co-authored-by:', 'signed-off-by:')

CHANGE_ID_TRAILER = 'Change-Id'
CO_DEVELOPED_BY_TRAILER = 'Co-developed-by'


def is_trailer_comment(line):
    return any(regex.match(line) for regex in TRAILER_COMMENT_RES)


def is_trailer(line):
    return bool(TRAILER_RE.match(line)) or is_trailer_comment(line)


def extract_user_info(line):
    """Return the value of a `Token: value` line, e.g. 'John Doe <john@example.com>'."""
    match = _USER_INFO_RE.match(line)
    if match:
        return match.group(1).strip()
    return None


def extract_username(line):
    """Return the name part of a trailer value, ignoring the email.

    'Co-authored-by: Cursor <noreply@cursor.com>' -> 'Cursor'. Returns `None` when
    `line` is not a trailer, the name is empty, or the value is just '<email>'.
    """
    user_info = extract_user_info(line)
    if not user_info:
        return None

    match = _NAME_EMAIL_RE.match(user_info)
    if match:
        return match.group(1).strip() or None

    if user_info.startswith('<'):
        return None
    return user_info


def filter_duplicate_trailers(lines, co_developed_by):
    """Drop Co-authored-by/Signed-off-by lines naming the same user as `co_developed_by`.

    Only the user name is compared, so 'Cursor <noreply@cursor.com>' and
    'Cursor <cursoragent@cursor.com>' are the same user.
    """
    username = extract_username('{}: {}'.format(CO_DEVELOPED_BY_TRAILER, co_developed_by))
    if not username:
        return lines

    def keep(line):
        if not line.lower().startswith(DUPLICATE_TRAILER_PREFIXES):
            return True
        line_username = extract_username(line)
        return line_username is None or line_username != username

    return [line for line in lines if keep(line)]


def split_trailer_block(lines):
    """Split `lines` into (body, trailers) where `trailers` is the trailing trailer block.

    The trailer block is the last run of trailer lines that follows a blank line and
    reaches the end of the message. Runs of trailer-looking lines followed by more
    text are part of the body.
    """
    body = []
    pending = []
    in_trailer_section = False

    for line in lines:
        if line == '':
            in_trailer_section = True
            body.extend(pending)
            pending = []
            body.append(line)
            continue

        if not in_trailer_section:
            body.append(line)
            continue

        if is_trailer(line):
            pending.append(line)
        else:
            body.extend(pending)
            pending = []
            in_trailer_section = False
            body.append(line)

    return body, pending


def _insertion_index(trailers):
    for index, trailer in enumerate(trailers):
        if not is_trailer_comment(trailer):
            # new trailers always go after an existing Change-Id
            if trailer.startswith(CHANGE_ID_TRAILER + ':'):
                return index + 1
            return index
    return len(trailers)


def insert_trailers(message, change_id=None, co_developed_by=None):
    """Insert a Change-Id and/or Co-developed-by trailer into a cleaned commit message.

    Empty or `None` values are not inserted. When `co_developed_by` is given, existing
    Co-authored-by/Signed-off-by trailers for the same user are removed.
    """
    new_trailers = []
    if change_id:
        new_trailers.append('{}: {}'.format(CHANGE_ID_TRAILER, change_id))
    if co_developed_by:
        new_trailers.append('{}: {}'.format(CO_DEVELOPED_BY_TRAILER, co_developed_by))

    output, existing_trailers = split_trailer_block(message.split('\n'))

    if existing_trailers:
        if co_developed_by:
            existing_trailers = filter_duplicate_trailers(existing_trailers, co_developed_by)
        index = _insertion_index(existing_trailers)
        output += existing_trailers[:index] + new_trailers + existing_trailers[index:]
    elif new_trailers:
        output += [''] + new_trailers

    return '\n'.join(output)
