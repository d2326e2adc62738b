# tests/test_summary_parser.py

from conftest import SUMMARY_REPLY
from therapy_scheduler.services.summary_parser import extract_field, find_summary, parse_summary


def test_parse_summary_extracts_text_after_each_label():
    summary = parse_summary(SUMMARY_REPLY)

    assert summary is not None
    assert summary.problem == "Anxiety"
    assert summary.schedule == "Weekdays at 4pm"
    assert summary.insurance == "Aetna"
    assert summary.specialist_needed == "Anxiety"
    assert summary.contact == "jane@example.com"
    assert summary.matched_therapist == "Dr. Amanda Wilson"


def test_value_stops_at_line_break():
    text = "Problem: trouble sleeping and\nconstant worry\nSchedule: Mondays\nInsurance: Kaiser\nSpecialist Needed: Sleep"
    assert parse_summary(text).problem == "trouble sleeping and"


def test_value_runs_to_end_of_string():
    text = "Problem: grief\nSchedule: evenings\nInsurance: United\nSpecialist Needed: Grief counseling"
    assert parse_summary(text).specialist_needed == "Grief counseling"


def test_markdown_bold_labels_are_accepted():
    text = (
        "**Problem:** Depression\n"
        "**Schedule:** Tuesdays after 5pm\n"
        "- **Insurance:** Anthem Blue Cross PPO\n"
        "**Specialist Needed:** Depression Specialist"
    )
    summary = parse_summary(text)
    assert summary.problem == "Depression"
    assert summary.insurance == "Anthem Blue Cross PPO"
    assert summary.specialist_needed == "Depression Specialist"


def test_optional_fields_may_be_absent():
    text = "Problem: stress\nSchedule: weekends\nInsurance: self-pay\nSpecialist Needed: Stress"
    summary = parse_summary(text)
    assert summary is not None
    assert summary.contact is None
    assert summary.matched_therapist is None


def test_missing_any_required_label_is_not_found():
    full = ["Problem: a", "Schedule: b", "Insurance: c", "Specialist Needed: d"]
    for i in range(len(full)):
        text = "\n".join(line for j, line in enumerate(full) if j != i)
        assert parse_summary(text) is None


def test_empty_value_counts_as_missing():
    text = "Problem: \nSchedule: b\nInsurance: c\nSpecialist Needed: d"
    assert parse_summary(text) is None


def test_labels_are_case_sensitive():
    text = "problem: a\nschedule: b\ninsurance: c\nspecialist needed: d"
    assert parse_summary(text) is None


def test_plain_conversation_is_not_a_summary():
    assert parse_summary("What insurance provider do you have?") is None
    assert parse_summary("") is None
    assert parse_summary(None) is None


def test_extract_field_single_label():
    assert extract_field("Contact:   555-0100  ", "contact") == "555-0100"


def test_find_summary_returns_first_complete_candidate():
    partial = "Problem: a\nSchedule: b"
    other = SUMMARY_REPLY.replace("Anxiety", "Trauma")

    assert find_summary([partial, SUMMARY_REPLY, other]).problem == "Anxiety"
    assert find_summary([partial, None]) is None


def test_label_inside_a_sentence_is_ignored():
    text = (
        "Emergency Contact: 911 (call if in crisis)\n"
        "Before we book, please confirm your Insurance: is it still Aetna?\n\n"
        "Problem: Anxiety\n"
        "Schedule: Weekdays at 4pm\n"
        "Insurance: Aetna\n"
        "Specialist Needed: Anxiety\n"
        "Contact: jane@example.com"
    )
    summary = parse_summary(text)
    assert summary.contact == "jane@example.com"
    assert summary.insurance == "Aetna"


def test_indented_and_bulleted_labels_are_accepted():
    text = (
        "  Problem: panic attacks\n"
        "* Schedule: Fridays\n"
        "1. Insurance: Cigna\n"
        "- *Specialist Needed:* Anxiety"
    )
    summary = parse_summary(text)
    assert summary.problem == "panic attacks"
    assert summary.schedule == "Fridays"
    assert summary.insurance == "Cigna"
    assert summary.specialist_needed == "Anxiety"


def test_mid_line_labels_alone_are_not_a_summary():
    text = "Tell me the Problem: Schedule: Insurance: Specialist Needed: details, please."
    assert parse_summary(text) is None
