"""Channel detection from free-text Tags / Channels cells."""

from __future__ import annotations

import re

from campaign_cadence.schema import ChannelFlags

_VM_ALTS = r"voicemail|voice\s*mail|vm|vmail"

_NO_MAIL = re.compile(r"\bno[-\s]?mail\b")
_MAIL = re.compile(r"\bmail\b")  # strict token, never inside "voicemail"
_TEXT = re.compile(r"\b(?:text|sms)\b")
_VM = re.compile(rf"\b(?:{_VM_ALTS})\b")
_ANY = re.compile(rf"\b(?:mail|text|sms|{_VM_ALTS})\b")
_NO_TEXT = re.compile(r"\bno[-\s]?(?:text|sms)\b")
_NO_VM = re.compile(rf"\bno[-\s]?(?:{_VM_ALTS})\b")


def channel_source(tags: object, channels: object) -> str:
    """Lower-cased search text built from the tags and channels cells."""

    return f"{tags or ''} {channels or ''}".lower()


def classify_channels(tags: object = "", channels: object = "") -> ChannelFlags:
    """Decide which of mail, text and voicemail a row goes out on.

    Rules run in a fixed order and later rules win:

    1. explicit tokens (a no-mail tag cancels mail)
    2. no channel tokens at all means a full mail + text + voicemail campaign,
       unless tagged no-mail
    3. mail implies a text follow-up unless text is negated
    4. mail implies a voicemail follow-up unless voicemail is negated
    5. negated text / voicemail always switch that channel off
    """

    src = channel_source(tags, channels)

    no_mail = bool(_NO_MAIL.search(src))
    no_text = bool(_NO_TEXT.search(src))
    no_vm = bool(_NO_VM.search(src))

    has_mail = bool(_MAIL.search(src)) and not no_mail
    has_text = bool(_TEXT.search(src))
    has_vm = bool(_VM.search(src))

    if not _ANY.search(src):
        has_mail = not no_mail
        has_text = True
        has_vm = True
    if has_mail and not no_text:
        has_text = True
    if has_mail and not no_vm:
        has_vm = True
    if no_text:
        has_text = False
    if no_vm:
        has_vm = False

    return ChannelFlags(has_mail=has_mail, has_text=has_text, has_vm=has_vm)
