"""Notification Formatting — pure functions that turn forum activity into channel messages.

Invariants:
    - All functions are pure (no IO, no async, no DB)
    - Every announcement carries an e-mail subject, an HTML body and a plain-text body
    - Post content is HTML-escaped in the e-mail body, left raw in the WhatsApp text
    - Links always point at <base>/thread/<thread id>
    - Subjects are single-line: whitespace runs in the title (CR/LF included)
      collapse to one space

Design Decisions:
    - Portuguese copy: the forum serves a Brazilian community and subscribers
      already recognise these subjects in their inbox
"""

from dataclasses import dataclass
from html import escape


@dataclass(frozen=True)
class Announcement:
    """One forum event rendered for every outbound channel."""
    subject: str
    html: str
    text: str


def thread_link(base_url: str, thread_id: object) -> str:
    """Absolute link to a thread page of the forum UI."""
    return f"{base_url.rstrip('/')}/thread/{thread_id}"


def _subject(title: str, suffix: str) -> str:
    return f"[{' '.join(title.split())}] {suffix}"


def _html_body(content: str, link: str) -> str:
    return (
        f"<p>{escape(content)}</p>"
        f'<p><a href="{escape(link, quote=True)}">Abrir no fórum</a></p>'
    )


def format_new_thread(
    title: str, content: str, thread_id: object, base_url: str,
) -> Announcement:
    """Announcement for a freshly opened thread (the question)."""
    link = thread_link(base_url, thread_id)
    return Announcement(
        subject=_subject(title, "Nova pergunta no grupo"),
        html=_html_body(content, link),
        text=f'Nova pergunta: "{title}"\n{content}\nAcesse: {link}',
    )


def format_reply(
    title: str, content: str, thread_id: object, base_url: str,
) -> Announcement:
    """Announcement for a reply posted to an existing thread."""
    link = thread_link(base_url, thread_id)
    return Announcement(
        subject=_subject(title, "Nova resposta"),
        html=_html_body(content, link),
        text=f'Nova resposta em "{title}":\n{content}\nAcesse: {link}',
    )
