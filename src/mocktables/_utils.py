def callable_name(func) -> str:
    name = getattr(func, "__name__", None) or repr(func)
    return "λ" if name == "<lambda>" else name
