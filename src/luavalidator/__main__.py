"""Allow ``python -m luavalidator``."""

from luavalidator.main import app

app(prog_name="luavalidator")
