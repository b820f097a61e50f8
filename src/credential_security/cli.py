"""``credsec`` command-line interface."""

from __future__ import annotations

import json
from typing import Annotated

import typer

from credential_security.common.exceptions import InputError
from credential_security.common.logging import setup_logging
from credential_security.service import CredentialSecurityService
from credential_security.settings import get_settings

app = typer.Typer(
    add_completion=False,
    invoke_without_command=True,
    help="Credential security CLI (hash, verify, validate, score, generate).",
)

SecretOption = Annotated[
    str,
    typer.Option(
        "--secret",
        prompt="Secret",
        hide_input=True,
        help="Secret to process; prompted for (hidden) when omitted.",
    ),
]


def _service() -> CredentialSecurityService:
    settings = get_settings()
    setup_logging(settings)
    return CredentialSecurityService(settings)


@app.callback()
def _main(ctx: typer.Context) -> None:
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


@app.command("hash")
def hash_command(secret: SecretOption) -> None:
    """Print an argon2id credential for the secret."""

    with _service() as service:
        try:
            hashed = service.hash(secret)
        except InputError as exc:
            typer.echo(f"error: {exc}", err=True)
            raise typer.Exit(code=2) from exc
    typer.echo(hashed)


@app.command("verify")
def verify_command(
    hashed: Annotated[str, typer.Argument(help="Stored credential to check against.")],
    secret: SecretOption,
) -> None:
    """Exit 0 when the secret matches the credential, 1 otherwise."""

    with _service() as service:
        matched = service.verify(secret, hashed)
    typer.echo("match" if matched else "no match")
    if not matched:
        raise typer.Exit(code=1)


@app.command("validate")
def validate_command(secret: SecretOption) -> None:
    """Check the secret against the password policy."""

    with _service() as service:
        outcome = service.validate(secret)
    if outcome.compliant:
        typer.echo("ok")
        return
    typer.echo(f"{outcome.rule.value}: {outcome.message}", err=True)
    raise typer.Exit(code=1)


@app.command("score")
def score_command(
    secret: SecretOption,
    as_json: Annotated[bool, typer.Option("--json", help="Emit JSON.")] = False,
) -> None:
    """Print a 0-4 strength score with feedback."""

    with _service() as service:
        assessment = service.score(secret)
    if as_json:
        typer.echo(json.dumps({"score": assessment.score, "feedback": list(assessment.feedback)}))
        return
    typer.echo(f"score: {assessment.score}/4")
    for item in assessment.feedback:
        typer.echo(f"- {item}")


@app.command("generate-password")
def generate_password_command(
    length: Annotated[
        int | None,
        typer.Option("--length", min=1, help="Password length (defaults to settings)."),
    ] = None,
) -> None:
    """Print a temporary password that satisfies the policy."""

    with _service() as service:
        try:
            password = service.generate_temporary_password(length)
        except ValueError as exc:
            typer.echo(f"error: {exc}", err=True)
            raise typer.Exit(code=2) from exc
    typer.echo(password)


@app.command("generate-token")
def generate_token_command(
    byte_length: Annotated[
        int | None,
        typer.Option("--bytes", min=1, help="Random bytes before hex encoding."),
    ] = None,
) -> None:
    """Print a hex-encoded opaque token."""

    with _service() as service:
        typer.echo(service.generate_secure_token(byte_length))


__all__ = ["app"]
