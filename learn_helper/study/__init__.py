"""
Study Engine for flashcard sessions.

Provides:
- Typo-tolerant answer matching (Damerau-Levenshtein)
- Card-type aware answer resolution, grading and completion checks
- Session building with cyclic start offsets
- Study -> Test -> Results state machine
- Set verdicts and streak rules
"""

from learn_helper.study.answers import (
    all_expected_answers,
    check_answer_match,
    check_written_answer,
    next_expected_answers,
    process_self_review,
    required_answers,
    validate_all_answers,
)
from learn_helper.study.results import (
    SetSummary,
    StreakUpdater,
    StudyMode,
    TestResult,
    apply_streak_updates,
    next_streak,
    partition_by_learned,
    passed,
    summarize,
)
from learn_helper.study.session import LearningPhase, LearningSession, TestMethod
from learn_helper.study.session_builder import (
    build_repeat_session,
    build_session,
    build_test_session,
    rotate_cards,
)
from learn_helper.study.similarity import DEFAULT_THRESHOLD, is_similar, similarity
from learn_helper.study.state_machine import (
    AnswerOutcome,
    FlowState,
    SessionFlow,
    StepResult,
    continue_test,
    next_set,
    next_study_card,
    report_self_review,
    retry_set,
    start_test,
    submit_answer,
)

__all__ = [
    # Matching
    "DEFAULT_THRESHOLD",
    "is_similar",
    "similarity",
    # Answers
    "all_expected_answers",
    "next_expected_answers",
    "required_answers",
    "check_answer_match",
    "validate_all_answers",
    "check_written_answer",
    "process_self_review",
    # Session
    "LearningPhase",
    "LearningSession",
    "TestMethod",
    "build_session",
    "build_test_session",
    "build_repeat_session",
    "rotate_cards",
    # State machine
    "AnswerOutcome",
    "StepResult",
    "FlowState",
    "SessionFlow",
    "next_study_card",
    "start_test",
    "submit_answer",
    "continue_test",
    "report_self_review",
    "retry_set",
    "next_set",
    # Results
    "TestResult",
    "SetSummary",
    "StudyMode",
    "StreakUpdater",
    "passed",
    "summarize",
    "next_streak",
    "apply_streak_updates",
    "partition_by_learned",
]
