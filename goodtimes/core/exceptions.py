"""
Custom exception hierarchy for goodtimes.

Every failure in a run is terminal: builds and metadata collection are
expensive, so nothing here is retried or recovered internally. Errors carry
enough context (phase, path, identifier) to be reported to a human.
"""

from __future__ import annotations

from enum import Enum


class GoodtimesException(Exception):
    """
    Base exception for all goodtimes errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (file paths, commands, etc.)
        exit_code: Suggested exit code for CLI (default: 1)
        recoverable: Whether retry/recovery may be possible
    """

    exit_code: int = 1
    recoverable: bool = False

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class GoodtimesConfigError(GoodtimesException):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(GoodtimesConfigError):
    """
    Error reading or parsing a configuration file.

    Raised for TOML parsing errors, permission errors, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Cargo Errors
# =============================================================================


class CargoError(GoodtimesException):
    """Base class for errors talking to cargo."""

    pass


class ManifestNotFoundError(CargoError):
    """The given manifest path does not point at a Cargo.toml."""

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path:
            ctx["path"] = path
        super().__init__(message, context=ctx, cause=cause)


class CargoCommandError(CargoError):
    """
    A cargo subprocess failed.

    Raised when cargo cannot be started or exits with a non-zero status.
    """

    def __init__(
        self,
        message: str,
        *,
        command: list[str] | None = None,
        exit_code: int | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if command:
            ctx["command"] = " ".join(command)
        if exit_code is not None:
            ctx["exit_code"] = exit_code
        super().__init__(message, context=ctx, cause=cause)


class MetadataDecodeError(CargoError):
    """`cargo metadata` produced output that is not valid package metadata."""

    pass


class ResolutionError(CargoError):
    """
    Package metadata has no resolved dependency graph.

    Distinct from an empty resolve section, which is a valid (empty) graph.
    """

    def __init__(
        self,
        message: str = "no dependency resolution found",
        *,
        manifest_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if manifest_path:
            ctx["manifest_path"] = manifest_path
        super().__init__(message, context=ctx, cause=cause)


# =============================================================================
# Timing Report Errors
# =============================================================================


class TimingReportError(GoodtimesException):
    """Base class for errors reading cargo's timing report."""

    pass


class ReportMissingError(TimingReportError):
    """
    The timing report does not exist.

    Usually means the build did not run or did not emit ``--timings`` output.
    """

    def __init__(
        self,
        message: str = "timing report not found",
        *,
        report_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if report_path:
            ctx["report_path"] = report_path
        super().__init__(message, context=ctx, cause=cause)


class ReportParseFailure(str, Enum):
    """Why the embedded unit data could not be extracted."""

    MARKER_NOT_FOUND = "marker_not_found"
    MALFORMED_PAYLOAD = "malformed_payload"


class ReportParseError(TimingReportError):
    """
    The embedded unit data block could not be located or decoded.

    ``reason`` tells a missing marker apart from a malformed payload.
    """

    def __init__(
        self,
        message: str,
        *,
        reason: ReportParseFailure,
        report_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        ctx["reason"] = reason.value
        if report_path:
            ctx["report_path"] = report_path
        super().__init__(message, context=ctx, cause=cause)
        self.reason = reason


class MalformedRecordError(ReportParseError):
    """A single unit row failed to decode; the whole report is rejected."""

    def __init__(
        self,
        message: str,
        *,
        index: int,
        report_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        ctx["index"] = index
        super().__init__(
            message,
            reason=ReportParseFailure.MALFORMED_PAYLOAD,
            report_path=report_path,
            context=ctx,
            cause=cause,
        )
        self.index = index


# =============================================================================
# Rendering Errors
# =============================================================================


class ReportRenderError(GoodtimesException):
    """The HTML report could not be assembled (e.g. missing assets)."""

    def __init__(
        self,
        message: str,
        *,
        assets_dir: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if assets_dir:
            ctx["assets_dir"] = assets_dir
        super().__init__(message, context=ctx, cause=cause)
