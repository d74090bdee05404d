#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/mdsync/flavors.py
"""Markdown flavor definitions and capabilities.

This module maps a flavor selector to the fixed set of parser and renderer
features it enables. The set of flavors is closed: every member of
:class:`Flavor` owns exactly one immutable :class:`MarkdownFlavor`, and the
mapping between them is exhaustive.

Supported Flavors
-----------------
- CommonMark: Strict CommonMark specification
- GFM (GitHub Flavored Markdown): CommonMark plus tables, strikethrough,
  autolinks, task lists, subscript and tag filtering

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)


class Flavor(str, Enum):
    """Closed set of supported markdown flavors."""

    COMMONMARK = "commonmark"
    GFM = "gfm"

    @classmethod
    def from_name(cls, name: object) -> Flavor:
        """Resolve a flavor selector, falling back to GFM.

        Parameters
        ----------
        name : object
            A :class:`Flavor`, a flavor name or synonym, or anything else.
            Matching ignores case and surrounding whitespace.

        Returns
        -------
        Flavor
            The matching flavor, or ``Flavor.GFM`` for absent, unknown or
            malformed selectors.

        """
        if isinstance(name, Flavor):
            return name
        if not isinstance(name, str):
            return cls.GFM
        return _FLAVOR_SYNONYMS.get(name.strip().lower(), cls.GFM)


_FLAVOR_SYNONYMS: Mapping[str, Flavor] = MappingProxyType(
    {
        "commonmark": Flavor.COMMONMARK,
        "common-mark": Flavor.COMMONMARK,
        "cm": Flavor.COMMONMARK,
        "gfm": Flavor.GFM,
        "github": Flavor.GFM,
    }
)


class MarkdownFlavor(ABC):
    """Abstract base class for markdown flavors.

    A flavor defines which markdown features the engine enables. Parse
    behavior that does not vary between flavors (smart punctuation, raw HTML
    suppression and source position tracking) is fixed on this base class.

    """

    @property
    @abstractmethod
    def flavor(self) -> Flavor:
        """Get the enum member this capability set belongs to.

        Returns
        -------
        Flavor
            Flavor identifier

        """
        pass

    @property
    def name(self) -> str:
        """Get the canonical flavor name (``"commonmark"`` or ``"gfm"``)."""
        return self.flavor.value

    @abstractmethod
    def supports_tables(self) -> bool:
        """Check if this flavor supports pipe tables.

        Returns
        -------
        bool
            True if pipe tables are supported

        """
        pass

    @abstractmethod
    def supports_strikethrough(self) -> bool:
        """Check if this flavor supports ``~~strikethrough~~`` text.

        Returns
        -------
        bool
            True if strikethrough is supported

        """
        pass

    @abstractmethod
    def supports_autolinks(self) -> bool:
        """Check if this flavor links bare URLs automatically.

        Returns
        -------
        bool
            True if extended autolinks are supported

        """
        pass

    @abstractmethod
    def supports_task_lists(self) -> bool:
        """Check if this flavor supports task lists (checkboxes).

        Returns
        -------
        bool
            True if task lists are supported

        """
        pass

    @abstractmethod
    def supports_subscript(self) -> bool:
        """Check if this flavor supports ``~subscript~`` text.

        Returns
        -------
        bool
            True if subscript is supported

        """
        pass

    @abstractmethod
    def supports_tagfilter(self) -> bool:
        """Check if this flavor filters dangerous raw HTML tags.

        Returns
        -------
        bool
            True if the tag filter is active

        """
        pass

    def supports_front_matter(self) -> bool:
        """Front matter is never parsed; a leading ``---`` block is ordinary markdown."""
        return False

    @property
    def smart_punctuation(self) -> bool:
        """Smart quotes and dashes are always substituted when rendering HTML."""
        return True

    @property
    def allow_raw_html(self) -> bool:
        """Raw HTML is never passed through to rendered output."""
        return False

    @property
    def source_positions(self) -> bool:
        """Source line positions are always recorded on parsed block nodes."""
        return True

    def feature_flags(self) -> dict[str, bool]:
        """Return every capability of this flavor keyed by feature name.

        Returns
        -------
        dict[str, bool]
            Feature name to enabled flag, in a stable order

        """
        return {
            "tables": self.supports_tables(),
            "strikethrough": self.supports_strikethrough(),
            "autolink": self.supports_autolinks(),
            "tasklist": self.supports_task_lists(),
            "subscript": self.supports_subscript(),
            "tagfilter": self.supports_tagfilter(),
            "front_matter": self.supports_front_matter(),
            "smart_punctuation": self.smart_punctuation,
            "raw_html": self.allow_raw_html,
            "source_positions": self.source_positions,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class CommonMarkFlavor(MarkdownFlavor):
    """Strict CommonMark specification flavor.

    CommonMark is a strongly defined, highly compatible specification of
    Markdown. No extensions are enabled.

    """

    @property
    def flavor(self) -> Flavor:
        """Get flavor identifier."""
        return Flavor.COMMONMARK

    def supports_tables(self) -> bool:
        """CommonMark does not support tables."""
        return False

    def supports_strikethrough(self) -> bool:
        """CommonMark does not support strikethrough."""
        return False

    def supports_autolinks(self) -> bool:
        """CommonMark only links URLs written in angle brackets."""
        return False

    def supports_task_lists(self) -> bool:
        """CommonMark does not support task lists."""
        return False

    def supports_subscript(self) -> bool:
        """CommonMark does not support subscript."""
        return False

    def supports_tagfilter(self) -> bool:
        """CommonMark does not define a tag filter."""
        return False


class GFMFlavor(MarkdownFlavor):
    """GitHub Flavored Markdown.

    GFM extends CommonMark with tables, strikethrough, extended autolinks
    and task lists, plus ``~subscript~`` text and the raw HTML tag filter.

    """

    @property
    def flavor(self) -> Flavor:
        """Get flavor identifier."""
        return Flavor.GFM

    def supports_tables(self) -> bool:
        """GFM supports pipe tables."""
        return True

    def supports_strikethrough(self) -> bool:
        """GFM supports strikethrough."""
        return True

    def supports_autolinks(self) -> bool:
        """GFM links bare URLs and www. addresses."""
        return True

    def supports_task_lists(self) -> bool:
        """GFM supports task lists."""
        return True

    def supports_subscript(self) -> bool:
        """GFM-mode subscript with single tildes."""
        return True

    def supports_tagfilter(self) -> bool:
        """GFM filters dangerous raw HTML tags."""
        return True


FLAVORS: Mapping[Flavor, MarkdownFlavor] = MappingProxyType(
    {
        Flavor.COMMONMARK: CommonMarkFlavor(),
        Flavor.GFM: GFMFlavor(),
    }
)


def resolve_flavor(name: object = None) -> MarkdownFlavor:
    """Map a flavor selector to its capability set.

    Never raises: absent, unknown and malformed selectors resolve to GFM.

    Parameters
    ----------
    name : object, optional
        Flavor name, synonym (``"cm"``, ``"common-mark"``, ``"github"``) or
        :class:`Flavor` member

    Returns
    -------
    MarkdownFlavor
        Shared immutable capability object for the resolved flavor

    Examples
    --------
    >>> resolve_flavor("CM").name
    'commonmark'
    >>> resolve_flavor("no-such-flavor").name
    'gfm'

    """
    flavor = Flavor.from_name(name)
    logger.debug("Resolved flavor %r to %s", name, flavor.value)
    return FLAVORS[flavor]


def get_markdown_flavors() -> list[str]:
    """Return the canonical names of all supported flavors."""
    return [flavor.value for flavor in Flavor]


def is_known_flavor(name: object) -> bool:
    """Whether a selector names a flavor rather than falling back to GFM."""
    return isinstance(name, Flavor) or (isinstance(name, str) and name.strip().lower() in _FLAVOR_SYNONYMS)
