class LessonBuildError(Exception):
    """Base exception for lesson build/integration failures."""
    pass


class DocumentMissingError(LessonBuildError):
    """Exception raised when the curated order lists a file the source does not supply."""

    def __init__(self, file_name: str):
        super().__init__(f"Document not found for curated entry: {file_name}")
        self.file_name = file_name


class DuplicateLessonIdError(LessonBuildError):
    """Exception raised when two documents map to the same lesson id."""

    def __init__(self, lesson_id: str, first: str, second: str):
        super().__init__(f"Duplicate lesson id: {lesson_id} (in {first} and {second})")
        self.lesson_id = lesson_id


class LessonNotFoundError(LessonBuildError):
    """Exception raised when a lesson id is looked up but not present."""

    def __init__(self, lesson_id: str):
        super().__init__(f"Lesson not found: {lesson_id}")
        self.lesson_id = lesson_id
