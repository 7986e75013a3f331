"""JSON translation catalogues loaded through :mod:`importlib.resources`."""
