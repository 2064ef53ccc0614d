"""Validator for built lesson records."""

import re
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, List

from models import Lesson

OPTION_IDS = ["a", "b", "c", "d"]
KEYWORD_RE = re.compile(r"^[0-9a-z]{3,}$")
MAX_KEYWORDS = 5


@dataclass
class Violation:
    rule: str
    lesson_id: str
    message: str


@dataclass
class ValidationResult:
    is_valid: bool
    violations: List[Violation] = field(default_factory=list)

    def get_summary(self) -> str:
        if self.is_valid:
            return "✓ Validation passed"

        lines = [f"✗ Validation failed with {len(self.violations)} violation(s):\n"]
        for v in self.violations:
            lines.append(f"  {v.lesson_id}: [{v.rule}] {v.message}")
        return "\n".join(lines)

    def get_violations_by_rule(self) -> Dict[str, List[Violation]]:
        by_rule = defaultdict(list)
        for v in self.violations:
            by_rule[v.rule].append(v)
        return dict(by_rule)


def check_identity(lesson: Lesson) -> List[Violation]:
    violations = []
    if not lesson.id:
        violations.append(Violation("empty_id", lesson.id, "Lesson id is empty"))
    if lesson.path != f"/{lesson.id}":
        violations.append(
            Violation("path_mismatch", lesson.id, f"Path '{lesson.path}' does not match id")
        )
    if not lesson.title.strip():
        violations.append(Violation("empty_title", lesson.id, "Title is empty"))
    return violations


def check_quiz(lesson: Lesson) -> List[Violation]:
    quiz = lesson.quiz
    violations = []
    if not quiz.question.strip():
        violations.append(Violation("quiz_question", lesson.id, "Quiz question is empty"))

    ids = [option.id for option in quiz.options]
    if ids != OPTION_IDS:
        violations.append(
            Violation("quiz_options", lesson.id, f"Expected option ids a..d, got {ids}")
        )
    if quiz.correct_answer_id not in ids:
        violations.append(
            Violation(
                "quiz_answer",
                lesson.id,
                f"Correct answer id '{quiz.correct_answer_id}' is not an option",
            )
        )
    return violations


def check_keywords(lesson: Lesson) -> List[Violation]:
    violations = []
    if len(lesson.keywords) > MAX_KEYWORDS:
        violations.append(
            Violation("keyword_count", lesson.id, f"{len(lesson.keywords)} keywords (max {MAX_KEYWORDS})")
        )
    if len(set(lesson.keywords)) != len(lesson.keywords):
        violations.append(Violation("keyword_duplicate", lesson.id, "Keywords are not unique"))
    for keyword in lesson.keywords:
        if not KEYWORD_RE.match(keyword):
            violations.append(
                Violation("keyword_shape", lesson.id, f"Keyword '{keyword}' is not lowercase alphanumeric")
            )
    return violations


def check_activity_and_exercise(lesson: Lesson) -> List[Violation]:
    violations = []
    if not lesson.interactive_example.tasks:
        violations.append(Violation("activity_tasks", lesson.id, "Interactive example has no tasks"))
    if not lesson.exercise.mini_tasks:
        violations.append(Violation("exercise_tasks", lesson.id, "Exercise has no mini tasks"))
    return violations


def validate_lesson(lesson: Lesson) -> ValidationResult:
    all_violations = []
    all_violations.extend(check_identity(lesson))
    all_violations.extend(check_quiz(lesson))
    all_violations.extend(check_keywords(lesson))
    all_violations.extend(check_activity_and_exercise(lesson))

    return ValidationResult(
        is_valid=len(all_violations) == 0, violations=all_violations
    )


def validate_lessons(lessons: List[Lesson]) -> ValidationResult:
    all_violations = []
    seen = set()
    for lesson in lessons:
        if lesson.id in seen:
            all_violations.append(Violation("duplicate_id", lesson.id, "Lesson id is not unique"))
        seen.add(lesson.id)
        all_violations.extend(validate_lesson(lesson).violations)

    return ValidationResult(
        is_valid=len(all_violations) == 0, violations=all_violations
    )
