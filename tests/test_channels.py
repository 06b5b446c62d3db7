from campaign_cadence.channels import classify_channels


def test_explicit_mail_text_voicemail():
    flags = classify_channels("", "Mail,Text,Voicemail")
    assert (flags.has_mail, flags.has_text, flags.has_vm) == (True, True, True)


def test_voicemail_is_not_mail():
    flags = classify_channels("", "voicemail")
    assert flags.has_mail is False
    assert flags.has_vm is True


def test_voice_mail_spaced_and_sms():
    assert classify_channels("", "Voice Mail").has_vm is True
    sms = classify_channels("", "SMS")
    assert sms.has_text is True
    assert sms.has_mail is False


def test_untagged_row_defaults_to_all_channels():
    flags = classify_channels("", "")
    assert (flags.has_mail, flags.has_text, flags.has_vm) == (True, True, True)


def test_nomail_tag_keeps_text_and_voicemail():
    only_tag = classify_channels("NoMail", "")
    assert (only_tag.has_mail, only_tag.has_text, only_tag.has_vm) == (False, True, True)

    with_channels = classify_channels("NoMail", "Text,Voicemail")
    assert (with_channels.has_mail, with_channels.has_text, with_channels.has_vm) == (False, True, True)


def test_mail_implies_follow_ups_unless_negated():
    flags = classify_channels("", "Mail")
    assert (flags.has_mail, flags.has_text, flags.has_vm) == (True, True, True)

    no_text = classify_channels("No Text", "Mail")
    assert (no_text.has_mail, no_text.has_text, no_text.has_vm) == (True, False, True)

    no_vm = classify_channels("No VM", "MAIL")
    assert (no_vm.has_mail, no_vm.has_text, no_vm.has_vm) == (True, True, False)


def test_negation_wins_over_explicit_token():
    flags = classify_channels("no-sms", "Text,Voicemail")
    assert flags.has_text is False
    assert flags.has_vm is True
