"""
Switchyard registry: configure switches, parse, and read results back.

What this module provides
- SwitchRegistry: the ordered configuration of three switch kinds (boolean,
  argument, option) plus the positionals collected by the last parse.
  • Fluent registration: add_boolean/add_argument/add_option return the registry.
  • Read-only access: booleans/arguments/options/positionals tuples,
    find_long/find_short lookups, positional_count/positional_at, command.
  • parse(argv): runs an ArgumentScanner over the vector and returns the registry.
  • Rich rendering of the current state (a table of switches and positionals).

Quick start
    from switchyard import SwitchRegistry

    registry = (
        SwitchRegistry()
        .add_boolean("verbose", "v")
        .add_argument("output", "o", ["out.bin"], ["a.out"])
        .add_option("mode", ["hs", "bs", "b"], 1)
    )
    registry.parse(["asm", "-v", "--mode", "hs", "input.s"])
    registry.find_long(BooleanSwitch, "verbose").value  # True

Design notes
- Matching priority is fixed by kind (boolean > argument > option); registration
  order only decides priority inside a kind and the iteration order.
- Forms are folded at registration; lookups fold their input too, so callers
  may use any case.
- Long forms and short forms (option entries included) are unique registry-wide.
"""
import itertools

from rich.console import Group
from rich.table import Table
from rich.text import Text

from .faults import *
from .scanner import ArgumentScanner, sanitize
from .switches import BooleanSwitch, ArgumentSwitch, OptionSwitch
from .utils import *


class SwitchRegistry:
    """
    Ordered switch configuration and parse results.

    Options (keyword-only)
    - strict: unknown long switches raise UnknownSwitchError instead of being
      ignored with an IgnoredSwitchWarning.
    - shell: faults are rendered to stderr with rich; errors exit with status 1.
    - fancy: faults are rendered inside a panel.
    - colorful: faults and the registry table are rendered with colors.
    """

    booleans = mirror("booleans")
    arguments = mirror("arguments")
    options = mirror("options")
    positionals = mirror("positionals")
    strict = mirror("strict")
    shell = mirror("shell")
    fancy = mirror("fancy")
    colorful = mirror("colorful")

    def __init__(self, argv=Unset, /, *, strict=False, shell=False, fancy=False, colorful=False):
        for name, flag in (("strict", strict), ("shell", shell), ("fancy", fancy), ("colorful", colorful)):
            if not isinstance(flag, bool):
                raise TypeError(f"switch-registry {name!r} must be a boolean")

        self._booleans = []
        self._arguments = []
        self._options = []
        self._positionals = []
        self._argv = Unset
        self._strict = strict
        self._shell = shell
        self._fancy = fancy
        self._colorful = colorful

        if argv is not Unset:
            self._argv = sanitize(argv)

    def __len__(self):
        return len(self._booleans) + len(self._arguments) + len(self._options)

    def __iter__(self):
        """
        Yield every switch in matching priority order (booleans, arguments, options).
        """
        return itertools.chain(self._booleans, self._arguments, self._options)

    def __repr__(self):
        return "switch-registry(booleans=%d, arguments=%d, options=%d, positionals=%d)" % (
            len(self._booleans), len(self._arguments), len(self._options), len(self._positionals)
        )

    def _register(self, switch, sequence, /):
        """
        Append a switch after checking its forms against every registered switch.
        """
        longs = {other.long for other in self if other.long}
        shorts = set()
        for other in self:
            if isinstance(other, OptionSwitch):
                shorts.update(other.options)
            elif other.short:
                shorts.add(other.short)

        if switch.long and switch.long in longs:
            raise ValueError(f"{type(switch).__typename__} long form {switch.long!r} is already in use")
        for short in switch.options if isinstance(switch, OptionSwitch) else filter(None, [switch.short]):
            if short in shorts:
                raise ValueError(f"{type(switch).__typename__} short form {short!r} is already in use")

        sequence.append(switch)
        return self

    def add_boolean(self, long, short="", default=False):
        """
        Register an on/off switch (`-short` turns it on, `--long on|off` sets it).
        """
        return self._register(BooleanSwitch(long, short, default), self._booleans)

    def add_argument(self, long, short="", preset=(), default=()):
        """
        Register a free-form switch (`-short` assigns `preset`, `--long a b` collects values).
        """
        return self._register(ArgumentSwitch(long, short, preset, default), self._arguments)

    def add_option(self, long, options, default=0):
        """
        Register an enumerated switch (`--long <option>` or `-<option>` selects an option).

        The default is an index into options and must be in range.
        """
        return self._register(OptionSwitch(long, options, default), self._options)

    def _sequence(self, kind):
        if kind is BooleanSwitch:
            return self._booleans
        elif kind is ArgumentSwitch:
            return self._arguments
        elif kind is OptionSwitch:
            return self._options
        raise TypeError("switch kind must be BooleanSwitch, ArgumentSwitch or OptionSwitch")

    def find_long(self, kind, form, /):
        """
        Return the first switch of `kind` whose long form equals the folded `form`, or None.
        """
        sequence = self._sequence(kind)
        if not (form := fold(form)):
            return None
        for switch in sequence:
            if switch.long == form:
                return switch
        return None

    def find_short(self, kind, form, /):
        """
        Return the first switch of `kind` whose short form equals the folded `form`, or None.

        Option switches match when any of their options equals the form.
        """
        sequence = self._sequence(kind)
        if not (form := fold(form)):
            return None
        for switch in sequence:
            if isinstance(switch, OptionSwitch):
                if form in switch.options:
                    return switch
            elif switch.short == form:
                return switch
        return None

    @property
    def positional_count(self):
        return len(self._positionals)

    def positional_at(self, index, /):
        """
        Return the positional at `index` (0-based, in the order they were found).
        """
        if not isinstance(index, int):
            raise TypeError("positional_at() argument must be an integer")
        if not 0 <= index < len(self._positionals):
            raise IndexError("positional index %d out of range for %d positionals" % (index, len(self._positionals)))
        return self._positionals[index]

    @property
    def argv(self):
        """
        Return the argument vector given at construction or to the last parse (None if none).
        """
        return coalesce(self._argv)

    @property
    def command(self):
        """
        Return argv[0], the invoking command token (None if no vector is known).
        """
        return self._argv[0] if self._argv else None

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this registry's runtime options merged in.
        """
        trigger(fault, **options, registry=self, shell=self._shell, fancy=self._fancy, colorful=self._colorful)

    def parse(self, argv=Unset, /):
        """
        Scan `argv` (or the vector given at construction) and update switch state.

        Raises the first ParseError encountered (or exits in shell mode). Switches
        matched before the failing token keep their new state.
        """
        if argv is Unset:
            if self._argv is Unset:
                raise TypeError("parse() requires an argument vector when none was given at construction")
            argv = self._argv

        ArgumentScanner(self).parse(argv)
        return self

    def __rich__(self):
        """
        Render the switch state and positionals as a table.
        """
        styles = {
            "kind": "bold #00E5FF",
            "form": "bold #FF4DA6",
            "value": "#E6E6F0",
            "overridden": "#9CE19C",
            "default": "#6B6F7A",
        } if self._colorful else {}

        table = Table(title=self.command, title_justify="left")
        table.add_column("kind", style=styles.get("kind", ""))
        table.add_column("forms", style=styles.get("form", ""))
        table.add_column("value", style=styles.get("value", ""))
        table.add_column("state")

        def state(switch):
            if switch.overridden:
                return Text("overridden", styles.get("overridden", ""))
            return Text("default", styles.get("default", ""))

        for switch in self._booleans:
            table.add_row("boolean", _forms(switch.long, switch.short), repr(switch.value), state(switch))
        for switch in self._arguments:
            table.add_row("argument", _forms(switch.long, switch.short), " ".join(map(repr, switch.value)), state(switch))
        for switch in self._options:
            table.add_row("option", _forms(switch.long, *switch.options), repr(switch.selected), state(switch))
        for positional in self._positionals:
            table.add_row("positional", "#%d" % positional.position, repr(positional.value), "")

        return Group(table)


def _forms(long, *shorts):
    return " | ".join(itertools.chain(
        ("--" + long,) if long else (),
        ("-" + short for short in shorts if short),
    ))


__all__ = (
    "SwitchRegistry",
)
