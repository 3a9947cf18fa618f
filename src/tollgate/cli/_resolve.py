"""App import resolution — resolves ``"module:attribute"`` strings to App instances.

Shared by ``tollgate run`` and ``tollgate routes``.
"""

import importlib

from tollgate.app import App


def resolve_app(import_string: str) -> App:
    """Resolve an import string to a tollgate App instance.

    Accepts ``"module:attribute"``. When the attribute is omitted it
    defaults to ``"app"``. Factory functions (anything callable that is
    not already an App) are called with no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not an App or a factory for one.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "app"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, App):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, App):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a tollgate.App instance"
        raise TypeError(msg)

    return obj
