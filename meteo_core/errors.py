from __future__ import annotations

STATUS_OK = "Fichier chargé avec succès !"
STATUS_FORMAT = "Fichier invalide. Vérifiez les colonnes et le séparateur."
STATUS_DATE = "Date invalide. Veuillez réessayer."


class MeteoError(Exception):
    """Base class for errors surfaced to the status line."""


class FormatError(MeteoError, ValueError):
    """Unknown delimiter or missing mandatory columns."""


class DateRangeError(MeteoError, ValueError):
    """A timestamp falls outside what the chart can represent."""


class GenericError(MeteoError):
    pass


def status_message(exc: BaseException | None = None) -> str:
    """
    One-line status for the UI after an import attempt.
    None means success.
    """
    if exc is None:
        return STATUS_OK
    if isinstance(exc, FormatError):
        return STATUS_FORMAT
    if isinstance(exc, DateRangeError):
        return STATUS_DATE
    return f"Erreur: {exc}"
