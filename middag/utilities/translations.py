"""String tables for the planner (English, Norwegian, Spanish).

Weekday labels and the placeholder dishes are part of the plan data, so the
generator and the reorder helpers look them up here as well as the page.
"""
from __future__ import annotations
from typing import Dict

from middag.utilities.constants import WEEKDAY_KEYS, SENTINEL_KEYS, SUPPORTED_LANGUAGES

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "appTitle": "Dinner Planner",
        "selectCategories": "Select Categories:",
        "createNewPlan": "Update Plan",
        "showCopyTable": "Show Copy-Friendly Table",
        "hideCopyTable": "Hide Copy-Friendly Table",
        "weeklyPlanTitle": "Weekly Plan:",
        "copyPlanTitle": "Copy-Friendly Weekly Plan:",
        "copyPlanInstructions": "The table content below has been copied to your clipboard.",
        "tableDayHeader": "Day",
        "tableMealHeader": "Meal",
        "lock": "Lock",
        "locked": "Locked",
        "unlockDay": "Unlock {day}",
        "lockDay": "Lock {day}",
        "noDishesAvailable": "No dishes available",
        "noDishFound": "No dish found",
        "errorKeptLocked": "Error (kept locked)",
        "copySuccess": "Table copied to clipboard!",
        "copyError": "Could not copy table to clipboard.",
        "monday": "Monday", "tuesday": "Tuesday", "wednesday": "Wednesday", "thursday": "Thursday",
        "friday": "Friday", "saturday": "Saturday", "sunday": "Sunday",
        "scoringMethodLabel": "Meal Selection:",
        "scoringRandom": "Random",
        "scoringWeighted": "Weighted (Top Preferred)",
        "languageLabel": "Language",
        "editMealHint": "Double-click to edit",
        "sharePlan": "Share Plan",
        "shareLinkCopied": "Share link copied to clipboard!",
        "shareError": "Could not share the plan.",
        "loadError": "Could not load the shared plan.",
        "saveError": "Could not save changes to the shared plan.",
        "menuLoadError": "Could not load dinner data.",
        "downloadPdf": "Download PDF",
    },
    "no": {
        "appTitle": "Middagsplanlegger",
        "selectCategories": "Velg kategorier:",
        "createNewPlan": "Oppdater plan",
        "showCopyTable": "Vis tabell",
        "hideCopyTable": "Skjul tabell",
        "weeklyPlanTitle": "Ukeplan:",
        "copyPlanTitle": "Ukeplan:",
        "copyPlanInstructions": "Tabellinnholdet nedenfor er kopiert til utklippstavlen.",
        "tableDayHeader": "Dag",
        "tableMealHeader": "Middag",
        "lock": "Lås",
        "locked": "Låst",
        "unlockDay": "Lås opp {day}",
        "lockDay": "Lås {day}",
        "noDishesAvailable": "Ingen retter tilgjengelig",
        "noDishFound": "Fant ingen rett",
        "errorKeptLocked": "Feil (beholdt låst)",
        "copySuccess": "Tabell kopiert til utklippstavlen!",
        "copyError": "Kunne ikke kopiere tabell til utklippstavlen.",
        "monday": "Mandag", "tuesday": "Tirsdag", "wednesday": "Onsdag", "thursday": "Torsdag",
        "friday": "Fredag", "saturday": "Lørdag", "sunday": "Søndag",
        "scoringMethodLabel": "Måltidsprioritering:",
        "scoringRandom": "Tilfeldig",
        "scoringWeighted": "Vektet (topp foretrukket)",
        "languageLabel": "Språk",
        "editMealHint": "Dobbeltklikk for å redigere",
        "sharePlan": "Del plan",
        "shareLinkCopied": "Delingslenke kopiert til utklippstavlen!",
        "shareError": "Kunne ikke dele planen.",
        "loadError": "Kunne ikke laste den delte planen.",
        "saveError": "Kunne ikke lagre endringene i den delte planen.",
        "menuLoadError": "Kunne ikke laste middagsdata.",
        "downloadPdf": "Last ned PDF",
    },
    "es": {
        "appTitle": "Planificador de Cenas",
        "selectCategories": "Seleccionar Categorías:",
        "createNewPlan": "Crear Nuevo Plan",
        "showCopyTable": "Mostrar Tabla Copiable",
        "hideCopyTable": "Ocultar Tabla Copiable",
        "weeklyPlanTitle": "Plan Semanal:",
        "copyPlanTitle": "Plan Semanal Copiable:",
        "copyPlanInstructions": "El contenido de la tabla a continuación ha sido copiado al portapapeles.",
        "tableDayHeader": "Día",
        "tableMealHeader": "Comida",
        "lock": "Bloquear",
        "locked": "Bloqueado",
        "unlockDay": "Desbloquear {day}",
        "lockDay": "Bloquear {day}",
        "noDishesAvailable": "No hay platos disponibles",
        "noDishFound": "No se encontró ningún plato",
        "errorKeptLocked": "Error (mantenido bloqueado)",
        "copySuccess": "¡Tabla copiada al portapapeles!",
        "copyError": "No se pudo copiar la tabla al portapapeles.",
        "monday": "Lunes", "tuesday": "Martes", "wednesday": "Miércoles", "thursday": "Jueves",
        "friday": "Viernes", "saturday": "Sábado", "sunday": "Domingo",
        "scoringMethodLabel": "Selección de Comida:",
        "scoringRandom": "Aleatorio",
        "scoringWeighted": "Ponderado (Superior Preferido)",
        "languageLabel": "Idioma",
        "editMealHint": "Doble clic para editar",
        "sharePlan": "Compartir Plan",
        "shareLinkCopied": "¡Enlace copiado al portapapeles!",
        "shareError": "No se pudo compartir el plan.",
        "loadError": "No se pudo cargar el plan compartido.",
        "saveError": "No se pudieron guardar los cambios del plan compartido.",
        "menuLoadError": "No se pudieron cargar los datos de cenas.",
        "downloadPdf": "Descargar PDF",
    },
}

__all__ = ['TRANSLATIONS', 'normalize_language', 'translate', 'day_labels', 'all_sentinel_messages', 'ui_strings']


def normalize_language(language: str | None, default: str = "en") -> str:
    """Return a supported language code, falling back to `default`."""
    code = (language or "").strip().lower()
    return code if code in SUPPORTED_LANGUAGES else default


def translate(language: str, key: str, **params: str) -> str:
    text = TRANSLATIONS.get(language, {}).get(key) or TRANSLATIONS["en"].get(key) or key
    for name, value in params.items():
        text = text.replace("{" + name + "}", value)
    return text


def day_labels(language: str) -> Dict[str, str]:
    """Weekday key -> localized label for the seven plan days."""
    return {key: translate(language, key) for key in WEEKDAY_KEYS}


def all_sentinel_messages() -> frozenset[str]:
    """Every placeholder dish text in every language.

    A plan may carry a placeholder rendered in an earlier language, so callers
    that must ignore placeholders check against all of them.
    """
    return frozenset(translate(lang, key) for lang in TRANSLATIONS for key in SENTINEL_KEYS)


def ui_strings(language: str) -> Dict[str, str]:
    """Full string table for the page script, English keys filled in as fallback."""
    merged = dict(TRANSLATIONS["en"])
    merged.update(TRANSLATIONS.get(language, {}))
    return merged
