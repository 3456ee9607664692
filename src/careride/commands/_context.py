"""AppContext: the object every careride command receives via ``@click.pass_obj``.

It owns logging setup, the lazily opened :class:`Store`, service
construction, and the single exit path for results (``emit``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

import click

from careride.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from careride.config.settings import CareSettings
    from careride.infrastructure.store import Clock, Store
    from careride.services.base import BaseService
    from careride.services.result import ServiceResult

_S = TypeVar("_S", bound="BaseService")


class AppContext:
    """Per-invocation state shared by the command groups.

    Nothing here touches the database until a command asks for the
    store, so ``--help``, ``--version`` and ``--examples`` stay cheap.
    """

    def __init__(self, settings: CareSettings, *, clock: Clock | None = None) -> None:
        from careride.config.logging import bind_actor, configure_logging
        from careride.services.telemetry import enable_telemetry

        self.settings = settings
        self._clock = clock
        self._store: Store | None = None

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
        bind_actor(
            patient_id=settings.identity.patient_id,
            doctor_id=settings.identity.doctor_id,
        )
        if settings.verbose:
            enable_telemetry()

    @property
    def store(self) -> Store:
        if self._store is None:
            from careride.infrastructure.store import Store

            self._store = Store(self.settings, clock=self._clock)
        return self._store

    def service(self, service_cls: type[_S]) -> _S:
        """Build *service_cls* over this invocation's store."""
        return service_cls(self.store)

    def close(self) -> None:
        """Dispose of the store; registered with ``ctx.call_on_close``."""
        if self._store is not None:
            self._store.close()
            self._store = None

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def emit(self, result: ServiceResult) -> None:
        """Print *result* and set the exit status.

        Accepted results go to stdout, with any warnings on stderr (JSON
        output carries them in the payload instead). Rejected results go
        to stderr and end the process with exit code 1.
        """
        settings = self.output_settings
        text = format_result(result, settings=settings)
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)
        click.echo(text)
        if settings.json_output:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
