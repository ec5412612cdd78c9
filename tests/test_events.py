"""Tests for change-record classification."""

import pytest

from surveysync_core.events import (
    ATTRIBUTES,
    CHARACTER_DATA,
    CHILD_LIST,
    ChangeRecord,
    DropdownChanged,
    InputEvent,
    OptionToggled,
    ScaleChanged,
    TextEdited,
    classify_record,
)
from surveysync_core.markers import DEFAULT_MARKERS


class TestClassifyRecord:
    def test_radio_checked(self):
        record = ChangeRecord(kind=ATTRIBUTES, target_tag="a", target_classes=["jqRadio", "jqChecked"],
                              attribute_name="class", question_index=2)
        assert classify_record(record) == OptionToggled(2, multi=False)

    def test_checkbox_checked(self):
        record = ChangeRecord(kind=ATTRIBUTES, target_tag="a", target_classes=["jqCheckbox", "jqChecked"],
                              attribute_name="class", question_index=5)
        assert classify_record(record) == OptionToggled(5, multi=True)

    @pytest.mark.parametrize("classes", [["jqRadio"], ["jqChecked"], ["other", "jqChecked"]])
    def test_partial_marker_is_ignored(self, classes):
        record = ChangeRecord(kind=ATTRIBUTES, target_tag="a", target_classes=classes, attribute_name="class")
        assert classify_record(record) is None

    def test_textarea_text(self):
        record = ChangeRecord(kind=CHARACTER_DATA, target_tag="#text", parent_tag="textarea",
                              question_index=4, value="hello")
        assert classify_record(record) == TextEdited(4, value="hello")

    def test_text_outside_textarea_is_ignored(self):
        record = ChangeRecord(kind=CHARACTER_DATA, target_tag="#text", parent_tag="label", value="x")
        assert classify_record(record) is None

    def test_dropdown_label_title(self):
        record = ChangeRecord(kind=ATTRIBUTES, target_tag="span", target_classes=["select2-selection__rendered"],
                              attribute_name="title", question_index=3, value="Shanghai")
        assert classify_record(record) == DropdownChanged(3, label="Shanghai")

    def test_dropdown_label_other_attribute_is_ignored(self):
        record = ChangeRecord(kind=ATTRIBUTES, target_tag="span", target_classes=["select2-selection__rendered"],
                              attribute_name="style")
        assert classify_record(record) is None

    def test_scale_item_class(self):
        record = ChangeRecord(kind=ATTRIBUTES, target_tag="li", target_classes=["rate", "on"],
                              attribute_name="class", in_scale_list=True, question_index=6)
        assert classify_record(record) == ScaleChanged(6)

    def test_list_item_outside_scale_is_ignored(self):
        record = ChangeRecord(kind=ATTRIBUTES, target_tag="li", target_classes=["on"], attribute_name="class")
        assert classify_record(record) is None

    def test_child_list_is_ignored(self):
        record = ChangeRecord(kind=CHILD_LIST, target_tag="div", target_classes=["div_question"])
        assert classify_record(record) is None

    def test_custom_markers(self):
        markers = DEFAULT_MARKERS.with_overrides({"radio_role": "choice", "checked_state": "picked"})
        record = ChangeRecord(kind=ATTRIBUTES, target_tag="span", target_classes=["choice", "picked"],
                              attribute_name="class", question_index=1)
        assert classify_record(record, markers) == OptionToggled(1, multi=False)


class TestRecordParsing:
    def test_change_record_from_dict(self):
        record = ChangeRecord.from_dict({
            "kind": "attributes",
            "targetTag": "A",
            "targetClasses": "jqRadio jqChecked",
            "attributeName": "class",
            "questionIndex": "3",
        })
        assert record.target_tag == "a"
        assert record.target_classes == ["jqRadio", "jqChecked"]
        assert record.question_index == 3
        assert record.in_scale_list is False

    def test_change_record_bad_index(self):
        record = ChangeRecord.from_dict({"kind": "childList", "questionIndex": "n/a"})
        assert record.question_index is None

    def test_input_event_from_dict(self):
        event = InputEvent.from_dict({"targetTag": "INPUT", "inputType": "Text", "questionIndex": 2, "value": "x"})
        assert event.target_tag == "input"
        assert event.input_type == "text"
        assert event.targets_free_text() is False
        assert event.question_index == 2

    @pytest.mark.parametrize("tag,input_type,expected", [
        ("textarea", "", True),
        ("input", "", False),
        ("input", "text", False),
        ("input", "radio", False),
        ("input", "checkbox", False),
        ("select", "", False),
    ])
    def test_free_text_targets(self, tag, input_type, expected):
        assert InputEvent(target_tag=tag, input_type=input_type).targets_free_text() is expected

    def test_free_text_follows_markers(self):
        markers = DEFAULT_MARKERS.with_overrides({"free_text": "input"})
        assert InputEvent(target_tag="input", input_type="text").targets_free_text(markers) is True
        assert InputEvent(target_tag="textarea").targets_free_text(markers) is False
