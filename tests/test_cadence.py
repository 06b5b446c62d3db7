from campaign_cadence.cadence import (
    campaign_group_key,
    infer_batch_num,
    ordinal,
    part_letter,
    stage_for_batch,
)


def test_stage_labels():
    assert stage_for_batch(None) == "Initial"
    assert stage_for_batch(0) == "Initial"
    assert stage_for_batch(1) == "Initial"
    assert stage_for_batch(2) == "2nd Follow-up"
    assert stage_for_batch(3) == "3rd Follow-up"
    assert stage_for_batch(4) == "4th Follow-up"
    assert stage_for_batch(5) == "Final"
    assert stage_for_batch(22) == "Final"


def test_ordinal_suffixes():
    assert [ordinal(n) for n in (1, 2, 3, 4, 11, 12, 13, 21, 22, 101, 111)] == [
        "1st", "2nd", "3rd", "4th", "11th", "12th", "13th", "21st", "22nd", "101st", "111th",
    ]


def test_infer_batch_num_joins_all_digits():
    assert infer_batch_num("Batch 2", "") == 2
    assert infer_batch_num("Batch 3", "B3") == 33
    assert infer_batch_num("Wave", "W") is None
    assert infer_batch_num(None, None) is None


def test_part_letter():
    assert part_letter("Batch A") == "A"
    assert part_letter("part c") == "C"
    assert part_letter("") == ""
    assert part_letter("12") == ""


def test_campaign_group_key():
    assert campaign_group_key("DM 1", "Batch A") == "DM 1 - A"
    assert campaign_group_key("DM 1 - A", "Batch B") == "DM 1 - B"
    assert campaign_group_key("DM 1 - A", "") == "DM 1 - A"
    assert campaign_group_key("  Promo  ", None) == "Promo"


def test_infer_batch_num_ignores_runs_too_long_for_a_number():
    assert infer_batch_num("1" * 400, "") is None
    assert stage_for_batch(infer_batch_num("1" * 400, "")) == "Initial"
