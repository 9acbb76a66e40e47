"""Extract YAML front matter from the top of a cheatsheet document.

A front-matter block is a ``---`` line, YAML content, and a closing ``---``
line at the very start of the text. :func:`split_front_matter` separates that
block from the body and decodes it into :class:`~cheatsheet_parser.models.Metadata`.
Malformed YAML never aborts parsing: it is logged and treated as empty
metadata.

Examples
--------
>>> from cheatsheet_parser.front_matter import split_front_matter
>>> metadata, body = split_front_matter("---\\ntitle: Demo\\n---\\n## Basics\\n")
>>> metadata.title, body
('Demo', '## Basics\\n')
"""

from __future__ import annotations

import logging
import re
import typing as typ

import msgspec
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .models import Metadata

logger = logging.getLogger(__name__)

FRONT_MATTER_PATTERN = re.compile(r"\A---[ \t]*\n(.*?)\n---[ \t]*(?:\n|\Z)", re.DOTALL)


def _load_yaml(text: str) -> typ.Any:
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    return loader.load(text)


def decode_front_matter(text: str) -> Metadata:
    """Decode the YAML payload of a front-matter block.

    Parameters
    ----------
    text : str
        YAML content found between the ``---`` delimiters.

    Returns
    -------
    Metadata
        Parsed metadata, or an empty ``Metadata`` when the YAML is malformed,
        does not describe a mapping, or holds values JSON cannot represent
        (such as self-referencing aliases).
    """
    try:
        loaded = _load_yaml(text)
    except (YAMLError, ValueError, TypeError) as exc:
        logger.warning("Error parsing YAML front matter: %s", exc)
        return Metadata()
    if loaded is None:
        return Metadata()
    if not isinstance(loaded, dict):
        logger.warning(
            "Ignoring front matter: expected a mapping, got %s", type(loaded).__name__
        )
        return Metadata()
    try:
        return Metadata.from_mapping(loaded)
    except (RecursionError, TypeError, ValueError, msgspec.EncodeError) as exc:
        logger.warning("Ignoring front matter: unsupported value: %s", exc)
        return Metadata()


def split_front_matter(
    content: str, *, include_metadata: bool = True
) -> tuple[Metadata, str]:
    """Return the decoded front matter and the remaining body text.

    The front-matter block (both delimiter lines included) is always removed
    from the body when present; ``include_metadata=False`` only skips the
    decoding step.
    """
    match = FRONT_MATTER_PATTERN.match(content)
    if match is None:
        return Metadata(), content
    body = content[match.end() :]
    if not include_metadata:
        return Metadata(), body
    return decode_front_matter(match.group(1)), body


__all__ = ["FRONT_MATTER_PATTERN", "decode_front_matter", "split_front_matter"]
