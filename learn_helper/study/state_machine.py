"""
Session phase state machine: Study -> Test -> Results -> (Retry | Next set).

Every transition is a pure function taking a LearningSession and returning a
new one (never mutating its input). ``SessionFlow`` wraps these for callers
that prefer a small stateful driver, the way a UI screen does.

Results is not a session phase of its own: a session is "in results" when it
is in the Test phase and every card of the active set has been recorded.

Test phase, manual method:
    submit_answer() grades one input against the answers still acceptable for
    the current card. A correct answer is added to the card's provided
    answers; a wrong one fails the card. continue_test() records the card once
    it is complete (enough answers, or failed) and moves on.

Test phase, self-review method:
    report_self_review() records the learner's verdict and moves on.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from loguru import logger

from learn_helper.core.errors import SessionStateError
from learn_helper.study.answers import check_answer_match, next_expected_answers
from learn_helper.study.results import TestResult, passed
from learn_helper.study.session import LearningPhase, LearningSession, TestMethod
from learn_helper.study.similarity import DEFAULT_THRESHOLD


@dataclass(frozen=True)
class AnswerOutcome:
    """Result of grading one typed answer."""

    session: LearningSession
    is_correct: bool
    matched_answer: str  # matched candidate, or the fallback expected answer
    card_complete: bool


@dataclass(frozen=True)
class StepResult:
    """Result of moving past a card in the Test phase."""

    session: LearningSession
    set_finished: bool
    passed: bool | None = None  # only set when set_finished


# =============================================================================
# Guards
# =============================================================================


def is_in_results(session: LearningSession) -> bool:
    """True once every card of the active set has a recorded result."""
    return session.phase == LearningPhase.TEST and session.is_set_complete


def _require_study(session: LearningSession) -> None:
    if session.phase != LearningPhase.STUDY:
        raise SessionStateError(f"Expected study phase, session is in {session.phase.value}")


def _require_testing(session: LearningSession, method: TestMethod) -> None:
    if session.phase != LearningPhase.TEST or session.is_set_complete:
        raise SessionStateError("No card is being tested")
    if session.test_method != method:
        raise SessionStateError(
            f"Operation requires {method.value} testing, session uses {session.test_method.value}"
        )


def _require_results(session: LearningSession) -> None:
    if not is_in_results(session):
        raise SessionStateError("Set is not finished yet")


# =============================================================================
# Study phase
# =============================================================================


def next_study_card(session: LearningSession) -> LearningSession:
    """Show the next card; after the last card of the set, start the test."""
    _require_study(session)

    next_index = session.current_card_in_set + 1
    if next_index >= session.actual_set_size:
        logger.debug(f"Set {session.current_set_number}: study complete, starting test")
        return replace(session, current_card_in_set=0, phase=LearningPhase.TEST, test_results=())
    return replace(session, current_card_in_set=next_index)


def start_test(session: LearningSession) -> LearningSession:
    """Skip the rest of the study phase and test from the first card."""
    _require_study(session)
    logger.debug(f"Set {session.current_set_number}: test started early")
    return replace(session, current_card_in_set=0, phase=LearningPhase.TEST, test_results=())


# =============================================================================
# Test phase
# =============================================================================


def _record_and_advance(session: LearningSession, result: TestResult) -> StepResult:
    advanced = replace(
        session,
        test_results=session.test_results + (result,),
        current_card_in_set=session.current_card_in_set + 1,
        current_card_provided_answers=(),
        current_card_failed=False,
    )

    if advanced.is_set_complete:
        verdict = passed(advanced)
        logger.debug(f"Set {advanced.current_set_number} finished, passed={verdict}")
        return StepResult(session=advanced, set_finished=True, passed=verdict)
    return StepResult(session=advanced, set_finished=False)


def submit_answer(
    session: LearningSession,
    user_input: str,
    threshold: float = DEFAULT_THRESHOLD,
) -> AnswerOutcome:
    """
    Grade one typed answer for the current card.

    Args:
        session: Session in the Test phase using manual testing
        user_input: The learner's answer
        threshold: Similarity threshold for typo tolerance

    Raises:
        SessionStateError: Not testing, wrong method, or card already complete
    """
    _require_testing(session, TestMethod.MANUAL)
    if session.is_card_complete:
        raise SessionStateError("Current card is complete; continue to the next card")

    card = session.current_card
    answer = user_input.strip()
    expected = next_expected_answers(card, session.current_card_provided_answers)
    is_correct, matched = check_answer_match(answer, expected, threshold)

    if is_correct:
        updated = replace(
            session,
            current_card_provided_answers=session.current_card_provided_answers + (answer,),
        )
    else:
        updated = replace(session, current_card_failed=True)

    logger.debug(f"'{card.word_name}': '{answer}' -> {'correct' if is_correct else 'wrong'}")
    return AnswerOutcome(
        session=updated,
        is_correct=is_correct,
        matched_answer=matched,
        card_complete=updated.is_card_complete,
    )


def continue_test(session: LearningSession) -> StepResult:
    """
    Move past the current card if it is complete.

    A complete card is recorded as correct unless it failed, with the given
    answers joined by ", ". An incomplete card is left as is (the learner
    still owes answers).
    """
    _require_testing(session, TestMethod.MANUAL)

    if not session.is_card_complete:
        return StepResult(session=session, set_finished=False)

    result = TestResult(
        word_name=session.current_card.word_name,
        is_correct=not session.current_card_failed,
        user_answer=", ".join(session.current_card_provided_answers),
        expected_answer=None,
    )
    return _record_and_advance(session, result)


def report_self_review(session: LearningSession, is_correct: bool) -> StepResult:
    """Record the learner's own verdict for the current card and move on."""
    _require_testing(session, TestMethod.SELF_REVIEW)
    result = TestResult.self_review(session.current_card.word_name, is_correct)
    return _record_and_advance(session, result)


# =============================================================================
# Results
# =============================================================================


def _reset_pass(session: LearningSession, set_start: int) -> LearningSession:
    return replace(
        session,
        current_set_start_index=set_start,
        current_card_in_set=0,
        phase=LearningPhase.STUDY,
        test_results=(),
        current_card_provided_answers=(),
        current_card_failed=False,
    )


def retry_set(session: LearningSession) -> LearningSession:
    """Study the same set again from its first card."""
    _require_results(session)
    logger.debug(f"Retrying set {session.current_set_number}")
    return _reset_pass(session, session.current_set_start_index)


def next_set(session: LearningSession) -> LearningSession | None:
    """
    Move on to the next set.

    Returns:
        The session in the Study phase of the next set, or None when every
        card has been covered.
    """
    _require_results(session)
    next_start = session.current_set_start_index + session.cards_per_set
    if next_start >= len(session.all_cards):
        logger.debug("All sets completed")
        return None

    logger.debug(f"Advancing to set {next_start // session.cards_per_set + 1}")
    return _reset_pass(session, next_start)


# =============================================================================
# Stateful driver
# =============================================================================


class FlowState(str, Enum):
    """What a presentation layer should show."""

    STUDY = "study"
    TEST = "test"
    RESULTS = "results"
    COMPLETED = "completed"  # no more sets


class SessionFlow:
    """
    Drives one session through its phases.

    Holds the current session value plus the bits of screen state a caller
    needs: last grading outcome, whether a self-review answer is revealed, and
    the verdict once a set finishes. Older session values handed out by
    ``session`` are never changed.
    """

    def __init__(self, session: LearningSession, threshold: float = DEFAULT_THRESHOLD):
        self.session = session
        self.threshold = threshold
        self.passed: bool | None = None
        self.last_outcome: AnswerOutcome | None = None
        self.answer_shown = False
        self.state = FlowState.STUDY if session.phase == LearningPhase.STUDY else FlowState.TEST

    @property
    def current_card(self):
        return self.session.current_card

    def next_card(self) -> FlowState:
        """Study phase: show the next card."""
        self.session = next_study_card(self.session)
        if self.session.phase == LearningPhase.TEST:
            self._enter_test()
        return self.state

    def start_test(self) -> FlowState:
        """Study phase: jump straight to the test."""
        self.session = start_test(self.session)
        self._enter_test()
        return self.state

    def submit(self, user_input: str) -> AnswerOutcome:
        """Manual test: grade one answer."""
        outcome = submit_answer(self.session, user_input, self.threshold)
        self.session = outcome.session
        self.last_outcome = outcome
        return outcome

    def proceed(self) -> FlowState:
        """Manual test: continue after feedback."""
        self._apply(continue_test(self.session))
        return self.state

    def show_answer(self) -> None:
        """Self-review: reveal the full card."""
        self.answer_shown = True

    def mark(self, is_correct: bool) -> FlowState:
        """Self-review: report the learner's verdict."""
        self._apply(report_self_review(self.session, is_correct))
        return self.state

    def retry(self) -> FlowState:
        """Results: study the same set again."""
        self.session = retry_set(self.session)
        self._reset_screen(FlowState.STUDY)
        return self.state

    def advance(self) -> FlowState:
        """Results: move to the next set, or finish."""
        following = next_set(self.session)
        if following is None:
            self.state = FlowState.COMPLETED
            return self.state
        self.session = following
        self._reset_screen(FlowState.STUDY)
        return self.state

    def _apply(self, step: StepResult) -> None:
        self.session = step.session
        self.last_outcome = None
        self.answer_shown = False
        if step.set_finished:
            self.state = FlowState.RESULTS
            self.passed = step.passed

    def _enter_test(self) -> None:
        self._reset_screen(FlowState.TEST)

    def _reset_screen(self, state: FlowState) -> None:
        self.state = state
        self.passed = None
        self.last_outcome = None
        self.answer_shown = False
