"""Module entrypoint for ``python -m credential_security`` CLI usage."""

from credential_security.cli import app


def main() -> None:
    app()


if __name__ == "__main__":
    main()
