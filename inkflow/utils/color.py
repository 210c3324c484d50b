"""Color token parsing.

Stroke colors travel through the pipeline as opaque strings.  Only the
render layer needs numbers, so parsing happens at that boundary.

Supported forms: ``"#rrggbb"``, ``"#rgb"`` (case-insensitive).  Output is
sRGB in [0, 1]; compositing is done in sRGB like a browser canvas.
"""

import re
from typing import Tuple

_HEX_RE = re.compile(r"^#([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_hex_color(token: str) -> Tuple[float, float, float]:
    """Convert a hex color token to an (r, g, b) float triple.

    Parameters
    ----------
    token : str
        "#rrggbb" or "#rgb"

    Returns
    -------
    Tuple[float, float, float]
        Channels in [0, 1]

    Raises
    ------
    ValueError
        If the token is not a hex color (e.g. the eraser sentinel)

    Examples
    --------
    >>> parse_hex_color("#ff8000")
    (1.0, 0.5019607843137255, 0.0)
    """
    match = _HEX_RE.match(token.strip()) if isinstance(token, str) else None
    if match is None:
        raise ValueError(f"Not a hex color: {token!r}. Use '#rrggbb' or '#rgb'.")

    digits = match.group(1)
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)

    return tuple(int(digits[i:i + 2], 16) / 255.0 for i in (0, 2, 4))


def is_hex_color(token: str) -> bool:
    return isinstance(token, str) and _HEX_RE.match(token.strip()) is not None
