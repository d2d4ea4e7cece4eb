# SPDX-License-Identifier: MIT
"""Canonical cache key derivation shared by the store and the cache."""

from typing import Any

from .constants import DEFAULT_KEY_TEMPLATE, DEFAULT_PATH_TEMPLATE, SHARED_RESOURCE_NAME


class KeyBuilder:
    """Derives canonical keys from (culture, resource group, name).

    Templates are substituted positionally: ``{0}`` is the culture, ``{1}`` the
    resource group and ``{2}`` the record name. The culture is always passed in
    explicitly; nothing here reads process locale state.
    """

    def __init__(
        self,
        key_template: str = DEFAULT_KEY_TEMPLATE,
        path_template: str = DEFAULT_PATH_TEMPLATE,
        shared_resource_name: str = SHARED_RESOURCE_NAME,
    ):
        self.key_template = key_template
        self.path_template = path_template
        self.shared_resource_name = shared_resource_name

    @classmethod
    def from_config(cls, key_config: Any) -> "KeyBuilder":
        """Build from a ``KeyConfig`` section."""
        return cls(
            key_template=key_config.key_template,
            path_template=key_config.path_template,
            shared_resource_name=key_config.shared_resource_name,
        )

    def resolve_resource_group(self, resource_group: Any = None) -> str:
        """Return the group name, falling back to the shared resource sentinel."""
        if resource_group is None:
            return self.shared_resource_name
        group = str(resource_group)
        return group if group else self.shared_resource_name

    def compute_key(self, culture: Any, resource_group: Any, name: Any) -> str:
        """Compute the canonical cache key for a record."""
        return self.key_template.format(
            str(culture), self.resolve_resource_group(resource_group), str(name)
        )

    def compute_path(self, culture: Any, resource_group: Any = None) -> str:
        """Compute the path fragment shared by every key of (culture, group)."""
        return self.path_template.format(
            str(culture), self.resolve_resource_group(resource_group)
        )
