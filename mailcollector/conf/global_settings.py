from __future__ import annotations

import os
from types import UnionType
from typing import Annotated, Any, ClassVar, Dict, Union, get_args, get_origin, get_type_hints

from typing_extensions import Doc

from mailcollector import __version__
from mailcollector.exceptions import ImproperlyConfigured
from mailcollector.logging import LoggingConfig
from mailcollector.protocols.variables import VariableStore


class BaseSettings:
    """
    Base of all the settings for the collector.
    """

    # `dict` is shadowed by the `dict()` method when the class annotations are resolved.
    __type_hints__: ClassVar[Dict[str, Any]] = None
    __truthy__: ClassVar[set[str]] = {"true", "1", "yes", "on", "y"}
    __env_prefix__: ClassVar[str] = "MAILCOLLECTOR_"

    def __init__(self, **kwargs: Any) -> None:
        """
        Initializes the settings by loading environment variables
        and casting them to the appropriate types.

        For every annotated attribute an environment variable named
        `MAILCOLLECTOR_<ATTRIBUTE>` is looked up. When set, it is cast to the
        annotated type; otherwise the keyword argument or the class default
        is used.
        """
        cls = self.__class__
        if cls.__dict__.get("__type_hints__") is None:
            cls.__type_hints__ = {
                key: typ
                for key, typ in get_type_hints(cls, include_extras=True).items()
                if get_origin(typ) is not ClassVar and not key.startswith("__")
            }

        if kwargs:
            for key, value in kwargs.items():
                setattr(self, key, value)

        for key, typ in cls.__type_hints__.items():
            base_type = self._extract_base_type(typ)

            env_value = os.getenv(f"{self.__env_prefix__}{key.upper()}", None)
            if env_value is not None and key not in kwargs:
                value = self._cast(env_value, base_type)
            else:
                value = getattr(self, key, None)
            setattr(self, key, value)

        self.post_init()

    def post_init(self) -> None:
        """
        Post-initialization method that can be overridden by subclasses.
        """
        ...

    def _extract_base_type(self, typ: Any) -> Any:
        origin = get_origin(typ)
        if origin is Annotated:
            return get_args(typ)[0]
        return typ

    def _cast(self, value: str, typ: Any) -> Any:
        """
        Casts the value to the specified type.
        If the type is `bool`, it checks for common truthy values.

        Raises:
            ImproperlyConfigured: If the value cannot be cast to the specified type.
        """
        try:
            origin = get_origin(typ)
            if origin is Union or origin is UnionType:
                non_none_types = [t for t in get_args(typ) if t is not type(None)]
                if str in non_none_types:
                    return value
                if len(non_none_types) == 1:
                    typ = non_none_types[0]
                else:
                    raise ValueError(f"Cannot cast to ambiguous Union type: {typ}")

            if typ is bool:
                return value.lower() in self.__truthy__
            return typ(value)
        except Exception:
            type_name = getattr(typ, "__name__", str(typ))
            raise ImproperlyConfigured(
                f"Cannot cast value '{value}' to type '{type_name}'"
            ) from None

    def dict(self, exclude_none: bool = False, exclude: set[str] | None = None) -> dict[str, Any]:
        """
        Dumps all the settings into a python dictionary.
        """
        exclude = exclude or set()
        result = {}
        for key in self.__type_hints__:
            if key in exclude:
                continue
            value = getattr(self, key, None)
            if exclude_none and value is None:
                continue
            result[key] = value
        return result


class Settings(BaseSettings):
    version: Annotated[str, Doc("The version of the mail collector.")] = __version__
    enabled: Annotated[
        bool | None,
        Doc(
            """
            Whether the testing mail system is switched on for the session.

            This option is required. When it is `False`, every lifecycle hook
            is a no-op but the assertions can still be used.
            """
        ),
    ] = None
    variable_store: Annotated[
        VariableStore | str | None,
        Doc(
            """
            The host's variable store, or a dotted path to one.

            The path may point to a store instance, a store class or any
            zero-argument callable returning a store.
            """
        ),
    ] = None
    mail_system_variable: Annotated[
        str,
        Doc("Name of the variable selecting the host's mail system."),
    ] = "mail_system"
    capture_variable: Annotated[
        str,
        Doc("Name of the variable the testing mail system appends messages to."),
    ] = "drupal_test_email_collector"
    default_mail_system: Annotated[
        str,
        Doc("Mail system assumed when the host has none configured."),
    ] = "DefaultMailSystem"
    testing_mail_system: Annotated[
        str,
        Doc("Mail system that captures messages instead of delivering them."),
    ] = "TestingMailSystem"
    logging_config: Annotated[
        LoggingConfig | None,
        Doc(
            """
            Optional logging configuration applied when the plugin starts.

            When left empty the collector logs through the `mailcollector`
            logger without touching the logging setup owned by pytest.
            """
        ),
    ] = None
