# server/hooks.py
from typing import Any, Callable, Dict

HookFn = Callable[..., Any]
_REGISTRY: Dict[str, HookFn] = {}

def hook(name: str):
    """Decorator to register a host hook handler."""
    def wrap(fn: HookFn) -> HookFn:
        _REGISTRY[name] = fn
        return fn
    return wrap

def get_hook(name: str) -> HookFn | None:
    return _REGISTRY.get(name)

def list_hooks() -> list[str]:
    return sorted(_REGISTRY.keys())

def dispatch(name: str, *args, **kwargs) -> Any:
    """Call the handler for ``name``; ``None`` when nothing is registered."""
    fn = _REGISTRY.get(name)
    if fn is None:
        return None
    return fn(*args, **kwargs)
