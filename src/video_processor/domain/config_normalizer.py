"""Normalization of caller-supplied processing parameters."""

from video_processor.exceptions import InvalidInputError

from .models import ProcessingConfig, ProcessingConfigInput

DEFAULT_FRAME_RATE = 1.0
DEFAULT_OUTPUT_FORMAT = "jpg"
SUPPORTED_OUTPUT_FORMATS = ("jpg", "png")
FORMAT_ALIASES = {"jpeg": "jpg"}

DEFAULT_PROCESSING_CONFIG = ProcessingConfig(
    frame_rate=DEFAULT_FRAME_RATE,
    output_format=DEFAULT_OUTPUT_FORMAT,
)


def normalize_config(
    config_input: ProcessingConfigInput | None,
    defaults: ProcessingConfig = DEFAULT_PROCESSING_CONFIG,
) -> ProcessingConfig:
    """
    Validates and canonicalizes processing parameters.

    Non-positive frame rates fall back to the default rate. The output format
    is trimmed and lowercased and "jpeg" is accepted as an alias of "jpg".
    A blank format is unsupported like any other unknown value.

    Args:
        config_input: Raw parameters, or None to use the defaults.
        defaults: Used when no input is given and for unusable frame rates.

    Returns:
        The normalized ProcessingConfig.

    Raises:
        InvalidInputError: If the output format is not supported.
    """
    if config_input is None:
        return defaults

    frame_rate = config_input.frame_rate
    if not frame_rate > 0:
        frame_rate = defaults.frame_rate

    output_format = config_input.output_format.strip().lower()
    output_format = FORMAT_ALIASES.get(output_format, output_format)
    if output_format not in SUPPORTED_OUTPUT_FORMATS:
        raise InvalidInputError(
            f"unsupported output_format: {output_format!r} "
            f"(allowed: {', '.join(SUPPORTED_OUTPUT_FORMATS)})"
        )

    return ProcessingConfig(frame_rate=frame_rate, output_format=output_format)
