"""
Notification template rendering.

Replaces `{token}` placeholders with computed values. Tokens without a
value are left in place literally.

Dependencies: re (stdlib)
System role: Message formatting for every notification kind
"""

import re
from typing import Mapping

_TOKEN = re.compile(r"\{([A-Za-z_][A-Za-z0-9_]*)\}")


def render_template(template: str, variables: Mapping[str, object]) -> str:
    """
    Substitute `{name}` tokens from `variables`.

    Args:
        template: Template text
        variables: Token name to value; values are converted with str()

    Returns:
        str: Rendered text; unknown tokens pass through unchanged
    """
    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key in variables and variables[key] is not None:
            return str(variables[key])
        return match.group(0)

    return _TOKEN.sub(_replace, template)
