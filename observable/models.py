from dataclasses import dataclass, fields
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from . import config
from .errors import ObservableConfigError


Callback = Callable[..., Any]

# event name -> callbacks in registration order
EventTable = Dict[str, List[Callback]]


@dataclass(frozen=True)
class ObservableOptions:
    # -------------------------------
    # Installed method names
    # -------------------------------
    subscribe_name: str = config.SUBSCRIBE_NAME
    unsubscribe_name: str = config.UNSUBSCRIBE_NAME
    publish_name: str = config.PUBLISH_NAME

    # -------------------------------
    # Validation
    # -------------------------------
    strict: bool = config.STRICT

    def __post_init__(self):
        names = self.method_names()
        for name in names:
            if not isinstance(name, str) or not name.isidentifier():
                raise ObservableConfigError(f"Method name must be an identifier: {name!r}")
            if name in (config.INSPECT_NAME, config.COUNT_NAME):
                raise ObservableConfigError(f"{name!r} is a reserved method name")
        if len(set(names)) != len(names):
            raise ObservableConfigError(f"Method names must be distinct: {names}")

    def method_names(self) -> List[str]:
        return [self.subscribe_name, self.unsubscribe_name, self.publish_name]

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> "ObservableOptions":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise ObservableConfigError(f"Unknown option(s): {', '.join(unknown)}")
        return cls(**options)


OptionsLike = Union[ObservableOptions, Mapping[str, Any], None]


def resolve_options(options: Optional[OptionsLike]) -> ObservableOptions:
    """Accept an ObservableOptions, a plain mapping, or None (all defaults)."""
    if options is None:
        return ObservableOptions()
    if isinstance(options, ObservableOptions):
        return options
    if isinstance(options, Mapping):
        return ObservableOptions.from_mapping(options)
    raise ObservableConfigError(f"Options must be a mapping or ObservableOptions, got {type(options).__name__}")
