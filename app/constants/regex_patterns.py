"""
Description:
This module contains precompiled regex patterns for reading the line-oriented
turn protocol the interviewer model is instructed to produce.

Labeled values may sit on the label's own line or on the line right after it.

Dependencies:
- re: Python's built-in regular expression module for pattern matching.
"""

import re

FEEDBACK_HEADER = "---FEEDBACK---"
NEXT_QUESTION_HEADER = "---NEXT_QUESTION---"
INTERVIEW_COMPLETE_HEADER = "---INTERVIEW_COMPLETE---"

# Label, optional single line break, then the first integer
_LABELED_INT = r"{label}:[ \t]*(?:\r?\n)?[^\n\d]*(\d+)"

# Compile regex patterns once for better performance
REGEX_PATTERNS = {
    'feedback_section': re.compile(
        FEEDBACK_HEADER + r"[ \t]*\r?\n?(.*?)(?=" + NEXT_QUESTION_HEADER + "|" + INTERVIEW_COMPLETE_HEADER + r"|\Z)",
        re.DOTALL,
    ),
    'feedback_score': re.compile(_LABELED_INT.format(label="FEEDBACK_SCORE")),
    'strengths': re.compile(r"STRENGTHS:[ \t]*(.*)"),
    'improvements': re.compile(r"IMPROVEMENTS:[ \t]*(.*)"),
    # A label and the rest of its line, wherever it appears, plus a bare number on the next line
    'labeled_lines': re.compile(
        r"[ \t]*(?:FEEDBACK_SCORE|STRENGTHS|IMPROVEMENTS):(?:[ \t]*\r?\n[ \t]*\d+[^\n]*$|[^\n]*)",
        re.MULTILINE,
    ),
    'next_question_header': re.compile(NEXT_QUESTION_HEADER),
    'next_question': re.compile(
        NEXT_QUESTION_HEADER + r"[ \t]*\r?\n?(.*?)(?=QUESTION_INDEX:|" + INTERVIEW_COMPLETE_HEADER + r"|\Z)",
        re.DOTALL,
    ),
    'question_index': re.compile(_LABELED_INT.format(label="QUESTION_INDEX")),
    'interview_complete_header': re.compile(INTERVIEW_COMPLETE_HEADER),
    'interview_complete': re.compile(
        INTERVIEW_COMPLETE_HEADER + r"[ \t]*\r?\n?(.*?)(?=OVERALL_SCORE:|" + NEXT_QUESTION_HEADER + r"|\Z)",
        re.DOTALL,
    ),
    'overall_score': re.compile(_LABELED_INT.format(label="OVERALL_SCORE")),
}
