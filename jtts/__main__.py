"""Module entrypoint for running jtts as ``python -m jtts``."""

from jtts.cli import app


if __name__ == "__main__":
    app(prog_name="jtts")
