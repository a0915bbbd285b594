"""
Centralized tables of built-in Django template behavior.

Goal:
- Keep hard-coded tag/filter knowledge out of rule logic.
- Make it obvious where to extend/override behavior when a project ships
  its own block tags or opaque regions.
"""

from __future__ import annotations

from .types import BlockTagSpec
from .types import OpaqueBlockSpec

# Regions whose contents Django does not parse as template code.
DEFAULT_OPAQUE_BLOCKS: dict[str, OpaqueBlockSpec] = {
    "comment": OpaqueBlockSpec(end_tags=["endcomment"]),
    "verbatim": OpaqueBlockSpec(end_tags=["endverbatim"], match_suffix=True),
}

# Delimiter structure of Django's built-in block tags (django.template.defaulttags,
# loader_tags, i18n, l10n, tz, cache).
DEFAULT_BLOCK_SPECS: list[BlockTagSpec] = [
    BlockTagSpec(
        start_tags=("if",),
        end_tags=("endif",),
        middle_tags=("elif", "else"),
        repeatable_middle_tags=("elif",),
        terminal_middle_tags=("else",),
    ),
    BlockTagSpec(
        start_tags=("for",),
        end_tags=("endfor",),
        middle_tags=("empty",),
        terminal_middle_tags=("empty",),
    ),
    BlockTagSpec(
        start_tags=("ifchanged",),
        end_tags=("endifchanged",),
        middle_tags=("else",),
        terminal_middle_tags=("else",),
    ),
    BlockTagSpec(
        start_tags=("block",),
        end_tags=("endblock",),
        end_suffix_from_start_index=1,
    ),
    BlockTagSpec(
        start_tags=("verbatim",),
        end_tags=("endverbatim",),
        end_suffix_from_start_index=1,
    ),
    BlockTagSpec(
        start_tags=("blocktranslate", "blocktrans"),
        end_tags=("endblocktranslate", "endblocktrans"),
        middle_tags=("plural",),
        terminal_middle_tags=("plural",),
    ),
    BlockTagSpec(start_tags=("with",), end_tags=("endwith",)),
    BlockTagSpec(start_tags=("filter",), end_tags=("endfilter",)),
    BlockTagSpec(start_tags=("spaceless",), end_tags=("endspaceless",)),
    BlockTagSpec(start_tags=("autoescape",), end_tags=("endautoescape",)),
    BlockTagSpec(start_tags=("comment",), end_tags=("endcomment",)),
    BlockTagSpec(start_tags=("localize",), end_tags=("endlocalize",)),
    BlockTagSpec(start_tags=("localtime",), end_tags=("endlocaltime",)),
    BlockTagSpec(start_tags=("timezone",), end_tags=("endtimezone",)),
    BlockTagSpec(start_tags=("language",), end_tags=("endlanguage",)),
    BlockTagSpec(start_tags=("cache",), end_tags=("endcache",)),
]

# name -> (deprecated in, removed in) Django major versions.
DEPRECATED_TAGS: dict[str, tuple[int, int]] = {
    "ifequal": (3, 4),
    "ifnotequal": (3, 4),
    "endifequal": (3, 4),
    "endifnotequal": (3, 4),
}

DEPRECATED_FILTERS: dict[str, tuple[int, int]] = {
    "length_is": (4, 5),
}

# `{% load ... %}` libraries.
DEPRECATED_LIBRARIES: dict[str, tuple[int, int]] = {
    "staticfiles": (2, 3),
    "admin_static": (2, 3),
}

# Exact release that deprecated/removed an entry, for messages.
RELEASE_NOTES: dict[str, tuple[str, str]] = {
    "ifequal": ("3.1", "4.0"),
    "ifnotequal": ("3.1", "4.0"),
    "endifequal": ("3.1", "4.0"),
    "endifnotequal": ("3.1", "4.0"),
    "length_is": ("4.2", "5.1"),
    "staticfiles": ("2.1", "3.0"),
    "admin_static": ("2.1", "3.0"),
}
