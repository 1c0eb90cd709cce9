"""Transform options and configuration file loading."""

import importlib.util
import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from bindify.compiler.exceptions import BindifyConfigError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "bindify.config.py"

DelimiterPair = Tuple[str, str]

# Config file variable -> option name
CONFIG_KEYS: Dict[str, str] = {
    "XHTML_MODE": "xhtml_mode",
    "BINDING_ATTRIBUTE": "binding_attribute",
    "SKIP_ATTRIBUTES": "skip_attributes",
    "TEMPLATE_DELIMITERS": "template_delimiters",
    "BINDING_DELIMITERS": "binding_delimiters",
    "OUTPUT_DELIMITERS": "output_delimiters",
    "NORMALIZE_WHITESPACE": "normalize_whitespace",
    "SYNTHETIC_TAG": "synthetic_tag",
    "EXTENSIONS": "extensions",
}


def _check_pair(pair: DelimiterPair) -> DelimiterPair:
    if not pair[0] or not pair[1]:
        raise ValueError("delimiters must be non-empty strings")
    return pair


class TransformOptions(BaseModel):
    """Options for :func:`bindify.transform`. Unset fields keep their defaults."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    xhtml_mode: bool = False
    binding_attribute: str = "data-bind"
    skip_attributes: Tuple[str, ...] = ("data-bind", "data-options")
    template_delimiters: Tuple[DelimiterPair, ...] = (("<%", "%>"), ("{{", "}}"))
    binding_delimiters: DelimiterPair = ("{", "}")
    output_delimiters: DelimiterPair = ("{{", "}}")
    normalize_whitespace: bool = True
    synthetic_tag: str = "span"

    @field_validator("binding_attribute", "synthetic_tag")
    @classmethod
    def check_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("template_delimiters")
    @classmethod
    def check_template_delimiters(
        cls, value: Tuple[DelimiterPair, ...]
    ) -> Tuple[DelimiterPair, ...]:
        return tuple(_check_pair(pair) for pair in value)

    @field_validator("binding_delimiters", "output_delimiters")
    @classmethod
    def check_delimiters(cls, value: DelimiterPair) -> DelimiterPair:
        return _check_pair(value)

    @model_validator(mode="after")
    def skip_binding_attribute(self) -> "TransformOptions":
        if self.binding_attribute not in self.skip_attributes:
            # frozen model: bypass __setattr__
            object.__setattr__(
                self, "skip_attributes", self.skip_attributes + (self.binding_attribute,)
            )
        return self

    @classmethod
    def resolve(
        cls, options: Union["TransformOptions", Mapping[str, Any], None] = None
    ) -> "TransformOptions":
        """Merge user options over the defaults, raising BindifyConfigError when invalid."""
        if isinstance(options, TransformOptions):
            return options
        try:
            return cls.model_validate(dict(options or {}))
        except ValidationError as e:
            raise BindifyConfigError("Invalid transform options", errors=e.errors()) from e


def load_config(path: Union[Path, str, None] = None) -> Dict[str, Any]:
    """
    Load configuration from a python file.

    If path is provided, loads from there.
    Otherwise, looks for bindify.config.py in the current working directory.

    Returns a dictionary of option names mapped from the uppercase variables
    found in the config module. Unknown uppercase variables are ignored.
    """
    if path is None:
        path = Path.cwd() / DEFAULT_CONFIG_FILENAME
    else:
        path = Path(path)

    if not path.exists():
        return {}

    try:
        spec = importlib.util.spec_from_file_location("bindify_config", path)
        if spec is None or spec.loader is None:
            return {}

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
    except Exception as e:
        logger.warning("Failed to load config from %s: %s", path, e)
        return {}

    config: Dict[str, Any] = {}
    for key, option in CONFIG_KEYS.items():
        if hasattr(module, key):
            config[option] = getattr(module, key)
    return config


def split_config(config: Mapping[str, Any]) -> Tuple[Dict[str, Any], Optional[Tuple[str, ...]]]:
    """Separate build-only settings (extensions) from transform options."""
    options = {key: value for key, value in config.items() if key != "extensions"}
    extensions = config.get("extensions")
    return options, tuple(extensions) if extensions is not None else None
