"""
QR rendering for JPYC payment URIs.

This module is intentionally thin. All URI rules live in:
    jpycpay/uri_scheme.py

Supported output formats:
- png:      data:image/png;base64,... string
- svg:      inline <svg> markup
- utf8:     text art using Unicode half blocks
- terminal: ANSI-coloured text for a terminal

`width` is a target in pixels for the raster/vector formats; the module
scale is the largest integer that keeps the symbol within it (minimum 1).
"""

from __future__ import annotations

import io
import logging
from typing import Optional, Union

import segno

from .errors import ErrorCode, JPYCPaymentError
from .models import (
    ErrorCorrectionLevel,
    QRCodeOptions,
    QRCodeResult,
    QROutputFormat,
)
from .protocol import OptionsLike, generate_payment_uri

logger = logging.getLogger(__name__)

DEFAULT_QR_OPTIONS = QRCodeOptions(
    error_correction_level=ErrorCorrectionLevel.M,
    width=300,
    margin=4,
    dark="#000000",
    light="#ffffff",
)


def merge_qr_options(qr_options: Optional[QRCodeOptions] = None) -> QRCodeOptions:
    """Fill every unset field of `qr_options` from DEFAULT_QR_OPTIONS."""
    if qr_options is None:
        return DEFAULT_QR_OPTIONS

    def pick(name: str):
        value = getattr(qr_options, name)
        return getattr(DEFAULT_QR_OPTIONS, name) if value is None else value

    return QRCodeOptions(
        error_correction_level=ErrorCorrectionLevel(pick("error_correction_level")),
        width=pick("width"),
        margin=pick("margin"),
        dark=pick("dark"),
        light=pick("light"),
    )


def _resolve_format(fmt: Union[str, QROutputFormat]) -> QROutputFormat:
    try:
        return QROutputFormat(fmt)
    except ValueError:
        raise JPYCPaymentError(
            f"Unsupported QR output format: {fmt}",
            ErrorCode.QR_GENERATION_FAILED,
            {"format": fmt},
        ) from None


def _make_qr(uri: str, opts: QRCodeOptions) -> segno.QRCode:
    return segno.make(
        uri,
        error=opts.error_correction_level.value,  # type: ignore[union-attr]
        micro=False,
        boost_error=False,
    )


def _scale_for(qr: segno.QRCode, opts: QRCodeOptions) -> int:
    modules, _ = qr.symbol_size(scale=1, border=opts.margin)
    return max(1, int(opts.width) // modules)  # type: ignore[arg-type]


def _render(uri: str, fmt: QROutputFormat, opts: QRCodeOptions) -> str:
    qr = _make_qr(uri, opts)

    if fmt is QROutputFormat.PNG:
        return qr.png_data_uri(
            scale=_scale_for(qr, opts), border=opts.margin, dark=opts.dark, light=opts.light
        )

    if fmt is QROutputFormat.SVG:
        return qr.svg_inline(
            scale=_scale_for(qr, opts), border=opts.margin, dark=opts.dark, light=opts.light
        )

    out = io.StringIO()
    if fmt is QROutputFormat.UTF8:
        qr.terminal(out=out, border=opts.margin, compact=True)
    else:
        qr.terminal(out=out, border=opts.margin)
    return out.getvalue()


def generate_qr_from_uri(
    uri: str,
    format: Union[str, QROutputFormat] = QROutputFormat.PNG,
    qr_options: Optional[QRCodeOptions] = None,
) -> QRCodeResult:
    """
    Render an already-built payment URI. The URI is not re-validated.
    """
    try:
        fmt = _resolve_format(format)
        opts = merge_qr_options(qr_options)
        data = _render(uri, fmt, opts)
    except JPYCPaymentError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise JPYCPaymentError(
            "Failed to generate QR code",
            ErrorCode.QR_GENERATION_FAILED,
            {"error": exc},
        ) from exc

    logger.debug("rendered QR format=%s bytes=%d", fmt.value, len(data))
    return QRCodeResult(data=data, format=fmt, uri=uri)


def generate_payment_qr_with_format(
    options: OptionsLike,
    format: Union[str, QROutputFormat] = QROutputFormat.PNG,
    qr_options: Optional[QRCodeOptions] = None,
) -> QRCodeResult:
    """
    Build the payment URI and render it in the requested format.

    URI builder errors (VALIDATION_FAILED, ...) propagate unchanged.
    """
    uri_result = generate_payment_uri(options)
    return generate_qr_from_uri(uri_result.uri, format, qr_options)


def generate_payment_qr(
    options: OptionsLike,
    qr_options: Optional[QRCodeOptions] = None,
) -> QRCodeResult:
    """PNG data URL for a payment URI."""
    return generate_payment_qr_with_format(options, QROutputFormat.PNG, qr_options)


def generate_payment_qr_buffer(
    options: OptionsLike,
    qr_options: Optional[QRCodeOptions] = None,
) -> bytes:
    """Raw PNG bytes for a payment URI."""
    uri_result = generate_payment_uri(options)

    try:
        opts = merge_qr_options(qr_options)
        qr = _make_qr(uri_result.uri, opts)
        buf = io.BytesIO()
        qr.save(
            buf,
            kind="png",
            scale=_scale_for(qr, opts),
            border=opts.margin,
            dark=opts.dark,
            light=opts.light,
        )
    except Exception as exc:  # noqa: BLE001
        raise JPYCPaymentError(
            "Failed to generate QR code buffer",
            ErrorCode.QR_GENERATION_FAILED,
            {"error": exc},
        ) from exc

    return buf.getvalue()
