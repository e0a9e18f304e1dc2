"""Allow ``python -m cargo_examples``."""

from cargo_examples.cli import app

app(prog_name="cargo-examples")
