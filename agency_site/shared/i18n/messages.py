"""User-facing strings in both locales."""

from agency_site.shared.i18n.locale import resolve_locale, get_default_locale
from agency_site.shared.errors import LocaleNotFound


MESSAGES = {
    "contact_success": {
        "id": "Pesan berhasil dikirim. Kami akan menghubungi Anda segera.",
        "en": "Message sent successfully. We will contact you soon.",
    },
    "too_many_requests": {
        "id": "Terlalu banyak permintaan. Silakan coba lagi nanti.",
        "en": "Too many requests. Please try again later.",
    },
    "challenge_failed": {
        "id": "Jawaban verifikasi salah. Silakan coba lagi.",
        "en": "Incorrect verification answer. Please try again.",
    },
    "submit_failed": {
        "id": "Gagal mengirim pesan. Silakan coba lagi nanti.",
        "en": "Failed to submit contact form. Please try again later.",
    },
}


def message_for(key: str, locale=None) -> str:
    """Localized message; unknown or missing locales use the default locale."""
    try:
        resolved = resolve_locale(locale)
    except LocaleNotFound:
        resolved = get_default_locale()
    return MESSAGES[key][resolved.value]
