r"""
Switchyard switch records.

Overview
- Records
  • BooleanSwitch: on/off switch; `-short` turns it on, `--long <word>` sets it
    from the on/off vocabulary (on, y, yes / off, n, no).
  • ArgumentSwitch: free-form switch; `-short` assigns a preset list of values,
    `--long a b c` collects the following positional-looking tokens.
  • OptionSwitch: enumerated switch; `--long <option>` selects an option and
    every option doubles as its own short form (`-<option>`).
  • Positional: a token that is neither a switch nor a switch value, with its
    1-based position in the argument vector.

- Introspection & representation
  • SwitchType metaclass exposes the fields named in __introspectable__ as
    read-only properties (see utils.mirror) and provides stable
    __repr__/__rich_repr__ implementations.

State
- `value`/`index` start at the registered default and `overridden` is False.
  Only the scanner changes them, through the private _override() hooks.
- Forms are folded to canonical case on construction, so the scanner compares
  folded tokens against folded forms.

Validation highlights
- Forms must be strings given without dash prefix and without whitespace.
  An empty form means "no such form" and never matches.
- Values must be iterables of strings (a bare string is rejected to avoid
  accidental character splitting).
- Options must be non-empty, unique after folding, and the default index must
  point inside them.
"""
import functools
import operator
import re
from collections.abc import Iterable
from typing import NamedTuple

from rich.text import Text

from .utils import *


class SwitchType(type):
    """
    Metaclass that turns switch classes into introspectable records.

    Responsibilities
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and pretty printing.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in validation messages (e.g., "boolean-switch").
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with the introspectable fields.

            Example
            - boolean-switch(long='verbose', short='v', value=False, default=False, overridden=False)
            """
            return f"{type(self).__typename__}({', '.join(map(functools.partial(operator.mod, '%s=%r'), self.__rich_repr__()))})"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_form(cls, form, label, /):
    """
    Internal: validate a long/short form or an option entry and fold it.

    Raises
    - TypeError: when the form is not a string.
    - ValueError: when the form starts with a dash or contains whitespace.

    Returns
    - str: the stripped, folded form ("" when no form was given).
    """
    if not isinstance(form, str):
        raise TypeError(f"{cls.__typename__} {label} must be a string")
    form = form.strip()
    if form.startswith("-"):
        raise ValueError(f"{cls.__typename__} {label} must be given without dash prefix ({form!r})")
    if re.search(r"\s", form):
        raise ValueError(f"{cls.__typename__} {label} cannot contain whitespaces ({form!r})")
    return fold(form)


def _sanitize_values(cls, values, label, /):
    """
    Internal: validate a list of raw values and materialize it as a tuple.

    Values are kept verbatim (no folding), they are what the user typed.
    """
    if isinstance(values, str) or not isinstance(values, Iterable):
        raise TypeError(f"{cls.__typename__} {label} must be an iterable of strings")
    values = tuple(values)
    if not all(isinstance(value, str) for value in values):
        raise TypeError(f"{cls.__typename__} {label} must be an iterable of strings")
    return values


class BooleanSwitch(metaclass=SwitchType):
    """
    On/off switch.

    - `-short` sets the value to True.
    - `--long <word>` sets it from the vocabulary: on, y, yes → True; off, n, no → False.
    """

    __introspectable__ = (
        "long",
        "short",
        "value",
        "default",
        "overridden",
    )

    def __init__(self, long="", short="", default=False):
        self._long = _sanitize_form(type(self), long, "long form")
        self._short = _sanitize_form(type(self), short, "short form")
        if not (self._long or self._short):
            raise ValueError(f"{type(self).__typename__} must specify a long or a short form")
        if not isinstance(default, bool):
            raise TypeError(f"{type(self).__typename__} default must be a boolean")
        self._default = default
        self._value = default
        self._overridden = False

    def _override(self, value, /):
        self._value = value
        self._overridden = True


class ArgumentSwitch(metaclass=SwitchType):
    """
    Free-form switch carrying a list of strings.

    - `-short` replaces the value with a copy of `preset`.
    - `--long a b ...` replaces the value with the positional-looking tokens that follow.
    """

    __introspectable__ = (
        "long",
        "short",
        "preset",
        "value",
        "default",
        "overridden",
    )

    def __init__(self, long="", short="", preset=(), default=()):
        self._long = _sanitize_form(type(self), long, "long form")
        self._short = _sanitize_form(type(self), short, "short form")
        if not (self._long or self._short):
            raise ValueError(f"{type(self).__typename__} must specify a long or a short form")
        self._preset = _sanitize_values(type(self), preset, "preset")
        self._default = _sanitize_values(type(self), default, "default")
        self._value = list(self._default)
        self._overridden = False

    def _override(self, values=(), /):
        self._value = list(values)
        self._overridden = True

    def _append(self, value, /):
        self._value.append(value)


class OptionSwitch(metaclass=SwitchType):
    """
    Enumerated switch selecting one of `options`.

    - `--long <option>` selects the option equal to the folded token.
    - `-<option>` selects that option directly.
    """

    __introspectable__ = (
        "long",
        "options",
        "index",
        "default",
        "overridden",
    )

    def __init__(self, long="", options=(), default=0):
        self._long = _sanitize_form(type(self), long, "long form")

        if isinstance(options, str) or not isinstance(options, Iterable):
            raise TypeError(f"{type(self).__typename__} options must be an iterable of strings")
        sanitized = []
        for option in options:
            if not (option := _sanitize_form(type(self), option, "option")):
                raise ValueError(f"{type(self).__typename__} options cannot be empty-strings")
            if option in sanitized:
                raise ValueError(f"{type(self).__typename__} options cannot contain duplicates ({option!r})")
            sanitized.append(option)
        if not sanitized:
            raise ValueError(f"{type(self).__typename__} must specify at least one option")
        self._options = tuple(sanitized)

        # bool is an int subclass but never a meaningful index
        if not isinstance(default, int) or isinstance(default, bool):
            raise TypeError(f"{type(self).__typename__} default must be an integer index")
        if not 0 <= default < len(self._options):
            raise IndexError(f"{type(self).__typename__} default index {default} is out of range for {len(self._options)} options")
        self._default = default
        self._index = default
        self._overridden = False

    @property
    def selected(self):
        """
        Return the currently selected option.
        """
        return self._options[self._index]

    def _override(self, index, /):
        self._index = index
        self._overridden = True


class Positional(NamedTuple):
    """
    Leftover token and its 1-based position in the argument vector.
    """
    value: str
    position: int

    def __rich__(self):
        return Text.assemble((str(self.position), "bold"), " ", repr(self.value))


__all__ = (
    "SwitchType",
    "BooleanSwitch",
    "ArgumentSwitch",
    "OptionSwitch",
    "Positional",
)
