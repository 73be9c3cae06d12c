"""Auto-discovery of command modules.

Every .py file in this package that defines a `command` object is
auto-registered by aura_reader.registry.discover().

The explicit imports below ensure PyInstaller includes these modules
in the frozen binary. Without them, pkgutil.iter_modules cannot find
the command files at runtime.
"""

# PyInstaller hidden imports, keep this list in sync with command modules
import aura_reader.commands.all as _all  # noqa: F401
import aura_reader.commands.chakras as _chakras  # noqa: F401
import aura_reader.commands.colours as _colours  # noqa: F401
import aura_reader.commands.overlay as _overlay  # noqa: F401
import aura_reader.commands.reading as _reading  # noqa: F401
