# Copyright (c) 2023 - 2025, HaiyangLi <quantocean.li at gmail dot com>
#
# SPDX-License-Identifier: Apache-2.0

"""User-facing messages produced by view-field validation."""

from __future__ import annotations

PLEASE_ENTER_A_VALID_VALUE = "Please enter a valid value for this field."
PLEASE_ENTER_VALID_VALUES = "Please enter valid values for this field."
PLEASE_SELECT_A_VALID_VALUE = "Please select a valid value for this field."
PLEASE_SELECT_VALID_VALUES = (
    "Please select one or more valid values for this field."
)
PLEASE_SELECT_A_VALID_PERSON = "Please select a valid person for this field."

THIS_IS_A_MANDATORY_FIELD = "This is a mandatory field."
YOU_CAN_LEAVE_THIS_FIELD_BLANK = (
    "Alternatively you can leave this field blank."
)
YOU_CAN_LEAVE_THIS_FIELD_BLANK_FOR_NOW = (
    "Alternatively you can leave this field blank for now."
)

SELECTED_VALUE_NOT_UNIQUE = "The selected value does not have a unique key."
UP_TO_N_VALUES = "Up to {limit} values are allowed."

AT_MOST_ONE_CHARACTER = (
    "Please enter a valid value with at most one character for this field."
)
AT_MOST_N_CHARACTERS = (
    "Please enter a valid value with at most {max_length} characters "
    "for this field."
)
AT_LEAST_ONE_CHARACTER = (
    "Please enter a valid value with at least one character for this field."
)
AT_LEAST_N_CHARACTERS = (
    "Please enter a valid value with at least {min_length} characters "
    "for this field."
)
BETWEEN_N_AND_M_CHARACTERS = (
    "Please enter a valid value with at least {min_length} and at most "
    "{max_length} characters for this field."
)
VALUES_WITH_AT_MOST_ONE_CHARACTER = (
    "Please enter valid values with at most one character for this field."
)
VALUES_WITH_AT_MOST_N_CHARACTERS = (
    "Please enter valid values with at most {max_length} characters "
    "for this field."
)

NUMBER_LESS_THAN = (
    "Please enter a valid value less than {maximum} for this field."
)
NUMBER_GREATER_THAN = (
    "Please enter a valid value greater than {minimum} for this field."
)
NUMBER_BETWEEN = (
    "Please enter a valid value between {minimum} and {maximum} "
    "for this field."
)
NUMBERS_LESS_THAN = (
    "Please enter valid values less than {maximum} for this field."
)
NUMBERS_GREATER_THAN = (
    "Please enter valid values greater than {minimum} for this field."
)
NUMBERS_BETWEEN = (
    "Please enter valid values between {minimum} and {maximum} "
    "for this field."
)

FILE_WITH_MAXIMUM_SIZE = (
    "Please select a file with a maximum file size of {size} MB."
)
FILE_OF_ALLOWED_TYPE_WITH_MAXIMUM_SIZE = (
    "Please select a file of an allowed type with a maximum file size "
    "of {size} MB."
)
FILES_WITH_MAXIMUM_SIZE = (
    "Please select files with a maximum file size of {size} MB."
)
FILES_OF_ALLOWED_TYPES_WITH_MAXIMUM_SIZE = (
    "Please select files of allowed types with a maximum file size "
    "of {size} MB."
)
UP_TO_N_FILES = "Up to {limit} files are allowed."
FILE_NAME_CHARACTERS = (
    "Please make sure file names do not contain any of the following "
    "characters: < > * % & : \\"
)
IMAGE_MIN_SIDE_LENGTH = (
    "The minimum image side length of the longer side must be {length} "
    "pixels."
)
IMAGE_MIN_RESOLUTION = (
    "The minimum image resolution must be {width} x {height} pixels."
)

DATE_TIME = "Please enter a valid {kind} for this field."
DATE_TIME_NOT_BEFORE = (
    "Please enter a valid {kind} not before {minimum} for this field."
)
DATE_TIME_NOT_AFTER = (
    "Please enter a valid {kind} not after {maximum} for this field."
)
DATE_TIME_BETWEEN = (
    "Please enter a valid {kind} between {minimum} and {maximum} "
    "for this field."
)

PASSWORD_CHARACTER_VARIANCE = (
    "Please make sure the value contains at least an upper case character, "
    "a lower case character, a numeric character and a special character."
)

YES = "Yes"
NO = "No"


def join(*parts: str | None) -> str:
    """Join message sentences, skipping empty ones."""
    return " ".join(p for p in parts if p)
