from rich.pretty import pprint
from rich.console import Console

from switchyard import *

__prog__ = "prgrm"


if __name__ == '__main__':
    registry = (
        SwitchRegistry(colorful=True)
        .add_boolean("boolSwitch1", "bs", False)
        .add_boolean("anotherboolean", "bs2", False)
        .add_option("custom1", ["cf1", "cs1", "ct1"], 1)
        .add_option("custom2", ["cf2", "cs2", "ct2"], 1)
        .add_argument("argtype", "arg", ["def2"], ["default"])
        .add_boolean("boolean3", "bs3", False)
    )
    registry.parse([
        "prgrm", "-bs", "--anotherBoolean", "ON", "-cf1", "--custom2", "cf2",
        "--argType", "args", "args2", "-bs3", "helloPositional",
    ])
    Console().print(registry)
    pprint(registry.positionals)
