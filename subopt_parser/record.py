"""
Record contract for subopt-parser.

A record is the structured value an option string is folded into. The
dispatcher (parser.py) only needs three things from it:

1. ``default()`` -- a fresh starting value, created once per parse.
2. ``update_from_value(value)`` -- apply a bare sub-option.
3. ``update_from_kvpair(key, value)`` -- apply a ``key=value`` sub-option.

Both update methods return ``None`` on success and raise a SubOptError
subclass on failure. Which keys exist, how values convert, and what
happens on a repeated key are entirely up to the record.

Two ways to provide one:
- Subclass ``SubOpt`` directly and write the two methods by hand.
- Subclass ``SubOptModel`` (a Pydantic model) and let the declared
  fields drive key lookup and value conversion.
"""

from __future__ import annotations

import types
import weakref
from abc import ABC, abstractmethod
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, TypeAdapter, ValidationError
from pydantic.fields import FieldInfo

from subopt_parser.config import DEFAULT_SETTINGS, ParserSettings
from subopt_parser.exceptions import (
    CustomError,
    MissingValueForKeyError,
    UnknownKeyError,
)


class SubOpt(ABC):
    """An option value built up from sub-options.

    Subclasses must be constructible with no arguments (or override
    ``default()``) and implement both update methods.
    """

    @classmethod
    def default(cls) -> SubOpt:
        """Return the record a parse starts from."""
        return cls()

    @abstractmethod
    def update_from_value(self, value: str) -> None:
        """Apply a bare sub-option, as in ``--foo value1:value2``.

        Raises:
            UnknownKeyError: If *value* is not recognised.
            MissingValueForKeyError: If *value* names a key that needs a value.
            CustomError: For any other domain-specific failure.
        """

    @abstractmethod
    def update_from_kvpair(self, key: str, value: str) -> None:
        """Apply a key/value sub-option, as in ``--foo key1=value1:key2=value2``.

        Raises:
            UnknownKeyError: If *key* is not recognised.
            CustomError: If *value* cannot be converted for *key*.
        """


def _describe(exc: ValidationError) -> str:
    """Flatten a Pydantic ValidationError into one line."""
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return "; ".join(parts)


_ADAPTERS: weakref.WeakKeyDictionary[type[BaseModel], dict[str, TypeAdapter[Any]]] = (
    weakref.WeakKeyDictionary()
)


def _field_adapter(model: type[BaseModel], name: str) -> TypeAdapter[Any]:
    """Validator for a single field: its type plus its constraints.

    Model-level and cross-field validators are not part of it; those run
    in ``SubOptModel.validate_complete()``. Adapters are cached per model
    class without keeping the class alive.
    """
    cache = _ADAPTERS.setdefault(model, {})
    adapter = cache.get(name)
    if adapter is None:
        info = model.model_fields[name]
        if info.metadata:
            adapter = TypeAdapter(Annotated[(info.annotation, *info.metadata)])
        else:
            adapter = TypeAdapter(info.annotation)
        cache[name] = adapter
    return adapter


def _is_flag(info: FieldInfo) -> bool:
    """True for ``bool`` fields, including ``bool | None``."""
    annotation = info.annotation
    if annotation is bool:
        return True
    if get_origin(annotation) in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        return args == [bool]
    return False


class SubOptModel(BaseModel, SubOpt):
    """A record whose sub-options are its Pydantic fields.

    Key handling:
    - ``key=value`` where *key* is a field name or alias: *value* is
      validated against that field alone (type and constraints). Failure
      raises CustomError with Pydantic's message.
    - bare value naming a ``bool`` (or ``bool | None``) field: sets it
      to ``True``.
    - bare value naming any other field: MissingValueForKeyError.
    - any other bare value: assigned to the field named by
      ``subopt_positional`` if set, else UnknownKeyError.
    - unknown key: UnknownKeyError.

    Repeated keys: last write wins.

    Parsing starts from ``model_construct()``, so fields without a default
    are simply absent until a sub-option sets them. Call
    ``validate_complete()`` after parsing to enforce required fields and
    model-level validators.

    Example::

        class Buf(SubOptModel):
            source: NonNegativeInt = 0
            offset: NonNegativeInt = 0
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    subopt_positional: ClassVar[str | None] = None

    @classmethod
    def __pydantic_init_subclass__(cls, **kwargs: Any) -> None:
        super().__pydantic_init_subclass__(**kwargs)
        positional = cls.subopt_positional
        if positional is not None and positional not in cls.model_fields:
            raise TypeError(
                f"subopt_positional {positional!r} is not a field of {cls.__name__}"
            )

    @classmethod
    def default(cls) -> SubOptModel:
        return cls.model_construct()

    @classmethod
    def field_for_key(cls, key: str) -> str | None:
        """Return the field name matching *key* (by name or alias), if any."""
        for name, info in cls.model_fields.items():
            if key == name or (info.alias is not None and key == info.alias):
                return name
        return None

    def _assign(self, key: str, name: str, value: object) -> None:
        try:
            converted = _field_adapter(type(self), name).validate_python(value)
        except ValidationError as exc:
            raise CustomError(
                f"invalid value {value!r} for key '{key}': {_describe(exc)}"
            ) from exc
        setattr(self, name, converted)

    def update_from_value(self, value: str) -> None:
        name = self.field_for_key(value)
        if name is not None:
            if _is_flag(type(self).model_fields[name]):
                self._assign(value, name, True)
                return
            raise MissingValueForKeyError(value)
        if self.subopt_positional is not None:
            self._assign(self.subopt_positional, self.subopt_positional, value)
            return
        raise UnknownKeyError(value)

    def update_from_kvpair(self, key: str, value: str) -> None:
        name = self.field_for_key(key)
        if name is None:
            raise UnknownKeyError(key)
        self._assign(key, name, value)

    def validate_complete(self) -> SubOptModel:
        """Run full model validation over the accumulated fields.

        Returns:
            A fully validated copy of this record.

        Raises:
            CustomError: If a required field was never set or a model
                validator rejects the combination of values.
        """
        try:
            return type(self).model_validate(dict(self.__dict__))
        except ValidationError as exc:
            raise CustomError(_describe(exc)) from exc

    def to_subopt_string(self, settings: ParserSettings | None = None) -> str:
        """Render the set fields back into sub-option form.

        ``True`` flag fields are written bare, ``None`` values are skipped.
        The positional field is written bare unless its value would read
        back as a key or a pair, in which case it gets ``key=`` form.
        Values containing the delimiter cannot be represented (there is no
        escaping) and raise ValueError.
        """
        settings = settings or DEFAULT_SETTINGS
        sep = settings.separator
        parts: list[str] = []
        positional = self.subopt_positional
        for name, info in type(self).model_fields.items():
            if name not in self.__dict__:
                continue
            value = self.__dict__[name]
            if value is None:
                continue
            key = info.alias or name
            if isinstance(value, bool):
                if value and _is_flag(info):
                    text = key
                else:
                    text = f"{key}{sep}{'true' if value else 'false'}"
            elif name == positional:
                text = str(value)
                if sep in text or self.field_for_key(text) is not None:
                    text = f"{key}{sep}{text}"
            else:
                text = f"{key}{sep}{value}"
            if settings.delimiter in text:
                raise ValueError(
                    f"Value for '{key}' contains delimiter {settings.delimiter!r}: {text!r}"
                )
            parts.append(text)
        return settings.delimiter.join(parts)
