"""
Configuration for the schema tree pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BindingConfig:
    """Configuration for binding path rendering.

    Attributes:
        separator: Text placed between field names
        array_placeholder: Segment appended when entering an array field
        index_format: Segment used once a concrete index is selected
        template_open: Opening delimiter of template values
        template_close: Closing delimiter of template values
        backref_root: Root marker of back-reference strings
        strict: Whether descending into a field absent from the tree raises
    """

    separator: str = "."
    array_placeholder: str = "[*]"
    index_format: str = "[{index}]"
    template_open: str = "{{"
    template_close: str = "}}"
    backref_root: str = "$"
    strict: bool = False


@dataclass
class CompilerConfig:
    """Configuration options for schema compilation."""

    # Name of the synthesized root type
    root_name: str = "ROOT"

    # Appended to every synthesized type name (field "bar" -> "BarType")
    type_suffix: str = "Type"

    # Whether structurally identical definitions may share a type name
    share_identical_types: bool = True

    # Binding proxy configuration
    binding: BindingConfig = field(default_factory=BindingConfig)

    @staticmethod
    def from_dict(d: dict) -> CompilerConfig:
        """Create a config from a dictionary."""
        config = CompilerConfig()
        for k, v in d.items():
            if k == "binding":
                if not isinstance(v, dict):
                    raise ValueError(f"'binding' must be an object, got {type(v).__name__}")
                for bk, bv in v.items():
                    if hasattr(config.binding, bk):
                        setattr(config.binding, bk, bv)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "root_name": self.root_name,
            "type_suffix": self.type_suffix,
            "share_identical_types": self.share_identical_types,
            "binding": {
                "separator": self.binding.separator,
                "array_placeholder": self.binding.array_placeholder,
                "index_format": self.binding.index_format,
                "template_open": self.binding.template_open,
                "template_close": self.binding.template_close,
                "backref_root": self.binding.backref_root,
                "strict": self.binding.strict,
            },
        }
