"""Base classes for parser and renderer options.

This module defines the foundation classes for the option objects used
throughout the render and reformat pipelines.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdsync.flavors import Flavor


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Parameters
    ----------
    flavor : Flavor, default Flavor.GFM
        Markdown flavor whose features the renderer honors. Strings and
        synonyms are accepted and resolved the same way as
        :func:`mdsync.flavors.resolve_flavor`.

    """

    flavor: Flavor = field(
        default=Flavor.GFM,
        metadata={
            "help": "Markdown flavor: commonmark or gfm (synonyms cm, common-mark, github)",
            "importance": "core",
        },
    )

    def __post_init__(self) -> None:
        """Resolve string flavors to :class:`Flavor` members."""
        object.__setattr__(self, "flavor", Flavor.from_name(self.flavor))
