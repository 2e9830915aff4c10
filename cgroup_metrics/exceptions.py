"""
Custom exception hierarchy for cgroup-metrics.

Every failure of a gather cycle surfaces as one of these, so callers can
tell a bad rule declaration apart from an unreadable control file or an
unrecognized file layout. All of them abort the current cycle; records
already handed to the accumulator are not rolled back.
"""


class CgroupMetricsError(Exception):
    """Base exception for all cgroup-metrics errors."""


class ConfigValidationError(CgroupMetricsError):
    """Raised when a rule has no usable path or no usable field.

    Detected during normalization, before any filesystem access.
    """


class CgroupIOError(CgroupMetricsError):
    """Raised when the filesystem cannot be read.

    Covers stat failures during path expansion, read failures of a
    declared control file, and malformed glob patterns. The underlying
    ``OSError`` (if any) is chained as ``__cause__``.
    """


class UnknownFormatError(CgroupMetricsError):
    """Raised when a control file matches none of the known layouts."""


class ExportError(CgroupMetricsError):
    """Raised when the exporter fails to write output files.

    For example, permission errors, disk full, or unsupported format.
    """
