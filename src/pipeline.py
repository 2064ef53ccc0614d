"""
主流程编排器

负责加载课程文档、按策划顺序组装课程、写出 JSON,并提供按 id 查找与检索
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from assembler.lesson_assembler import LessonAssembler
from exceptions import DocumentMissingError, DuplicateLessonIdError, LessonNotFoundError
from models import BuildResult, Lesson


class LessonPipeline:
    """课程构建流程编排器"""

    def __init__(self, config: dict[str, Any], logger: logging.Logger):
        """
        初始化流程编排器

        Args:
            config: 系统配置
            logger: 日志记录器
        """
        self.config = config
        self.logger = logger

        lessons_config = config.get("lessons", {})
        self.source_dir = Path(lessons_config.get("source_dir", "content/lessons"))
        self.order: list[str] = list(lessons_config.get("order", []))
        self.exclude: set[str] = set(lessons_config.get("exclude", []))
        self.output_name: str = lessons_config.get("output_name", "lessons.json")
        self.output_dir = Path(config.get("system", {}).get("output_dir", "data/output"))

        quiz_config = config.get("quiz", {})
        self.assembler = LessonAssembler(
            reproducible=bool(quiz_config.get("reproducible", False)),
            overrides=quiz_config.get("overrides", {}),
            logger=logger,
        )

        self.logger.info("LessonPipeline 初始化完成")

    def load_documents(self, source_dir: str | Path | None = None) -> dict[str, str]:
        """
        从目录读取全部 Markdown 文档

        Args:
            source_dir: 文档目录(默认使用配置中的 lessons.source_dir)

        Returns:
            文件名 → 文档原文
        """
        directory = Path(source_dir) if source_dir else self.source_dir
        if not directory.is_dir():
            raise FileNotFoundError(f"Lesson source directory not found: {directory}")

        documents: dict[str, str] = {}
        for file_path in sorted(directory.glob("*.md")):
            documents[file_path.name] = file_path.read_text(encoding="utf-8-sig")

        self.logger.info(f"已加载 {len(documents)} 篇文档: {directory}")
        return documents

    def resolve_order(self, documents: dict[str, str]) -> list[str]:
        """返回构建顺序: 配置了策划顺序则原样使用,否则按文件名排序"""
        if self.order:
            return list(self.order)

        self.logger.warning("未配置 lessons.order, 按文件名排序构建")
        return [name for name in sorted(documents) if name not in self.exclude]

    def build(self, documents: dict[str, str], order: list[str] | None = None) -> BuildResult:
        """
        按顺序组装全部课程

        Args:
            documents: 文件名 → 文档原文
            order: 策划顺序(可选,默认由 resolve_order 决定)

        Returns:
            BuildResult: 保持策划顺序的构建结果

        Raises:
            DocumentMissingError: 策划顺序中的文件在文档源中不存在
            DuplicateLessonIdError: 两个文件派生出相同的 lesson id
        """
        start_time = time.time()
        file_names = order if order is not None else self.resolve_order(documents)

        missing = [name for name in file_names if name not in documents]
        if missing:
            self.logger.error(f"策划顺序与文档源不一致, 缺失: {', '.join(missing)}")
            raise DocumentMissingError(missing[0])

        result = BuildResult(source_dir=str(self.source_dir))
        seen: dict[str, str] = {}
        for file_name in file_names:
            lesson = self.assembler.assemble(file_name, documents[file_name])
            previous = seen.get(lesson.id)
            if previous is not None:
                raise DuplicateLessonIdError(lesson.id, previous, file_name)
            seen[lesson.id] = file_name
            result.add_lesson(lesson)
            self.logger.info(f"课程构建完成: {lesson.id} ({lesson.title})")

        result.total_time = time.time() - start_time
        self.logger.info(str(result))
        return result

    def write_output(self, result: BuildResult, path: str | Path | None = None) -> Path:
        """将构建结果写为 JSON 文件"""
        output_path = Path(path) if path else self.output_dir / self.output_name
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(result.to_dict(), f, ensure_ascii=False, indent=2)
        self.logger.info(f"课程数据已写入 {output_path}")
        return output_path

    def run(self, output_path: str | Path | None = None) -> BuildResult:
        """加载 → 构建 → 写出"""
        documents = self.load_documents()
        result = self.build(documents)
        self.write_output(result, output_path)
        return result


class LessonCatalog:
    """课程目录: 按 id 查找和关键词检索(不改变课程顺序)"""

    def __init__(self, lessons: list[Lesson]):
        self._lessons = list(lessons)
        self._by_id = {lesson.id: lesson for lesson in self._lessons}

    def __len__(self) -> int:
        return len(self._lessons)

    def __iter__(self) -> Iterator[Lesson]:
        return iter(self._lessons)

    def ids(self) -> list[str]:
        return [lesson.id for lesson in self._lessons]

    def get(self, lesson_id: str) -> Lesson:
        lesson = self._by_id.get(lesson_id)
        if lesson is None:
            raise LessonNotFoundError(lesson_id)
        return lesson

    def search(self, term: str) -> list[Lesson]:
        """大小写不敏感的子串检索; 空检索词返回全部课程"""
        if not term.strip():
            return list(self._lessons)
        return [lesson for lesson in self._lessons if lesson.matches(term)]
