"""
Configuration for the allOf merge engine.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class MergeConfig:
    """Configuration options for merging allOf schemas."""

    # Redirect merges to the legacy algorithm instead of this engine
    old_merge_schemas: bool = False

    # Maximum nesting of transitively flattened allOf lists
    max_all_of_depth: int = 64

    # Directory external documents are loaded from
    schema_base_path: str = ""

    # Add generation comment at top of generated code
    add_generation_comment: bool = True

    @staticmethod
    def from_dict(d: dict) -> MergeConfig:
        """Create a config from a dictionary."""
        config = MergeConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "old_merge_schemas": self.old_merge_schemas,
            "max_all_of_depth": self.max_all_of_depth,
            "schema_base_path": self.schema_base_path,
            "add_generation_comment": self.add_generation_comment,
        }
