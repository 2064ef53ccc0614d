#!/usr/bin/env python3
"""
Lesson-Transformer 主程序

课程 Markdown 文档结构化与测验/练习生成系统
"""

import argparse
import sys
from pathlib import Path

# 添加 src 到路径
sys.path.insert(0, str(Path(__file__).parent / "src"))

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from exceptions import LessonBuildError, LessonNotFoundError
from models import BuildResult, Lesson
from pipeline import LessonCatalog, LessonPipeline
from tools.validate_lessons import validate_lessons
from utils.config import load_config
from utils.logger import setup_logging


class LessonTransformerCLI:
    """CLI 应用主类"""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def print(self, *args, **kwargs):
        """美化打印"""
        self.console.print(*args, **kwargs)

    def run(self, args: argparse.Namespace) -> int:
        """
        运行主程序

        Args:
            args: 命令行参数

        Returns:
            退出码 (0=成功, 1=失败)
        """
        try:
            # 1. 加载配置
            self.print("\n[bold blue]🔧 加载配置文件...[/bold blue]")
            config = load_config(args.config)

            # 覆盖配置(如果命令行指定)
            if args.source:
                config["lessons"]["source_dir"] = args.source
            if args.output_dir:
                config["system"]["output_dir"] = args.output_dir
            if args.reproducible:
                config["quiz"]["reproducible"] = True

            # 2. 初始化日志
            log_level = "DEBUG" if args.verbose else config["system"]["log_level"]
            logger = setup_logging(config["system"]["log_dir"], "main.log", log_level)
            logger.info("=" * 60)
            logger.info("Lesson-Transformer 启动")
            logger.info("=" * 60)

            # 3. 构建课程
            pipeline = LessonPipeline(config=config, logger=logger)
            result = pipeline.run()
            catalog = LessonCatalog(result.lessons)

            # 4. 校验(可选)
            if args.check:
                validation = validate_lessons(result.lessons)
                if not validation.is_valid:
                    self.print(f"[bold red]{escape(validation.get_summary())}[/bold red]")
                    return 1
                self.print("[green]✅ 课程记录校验通过[/green]")

            # 5. 输出
            if args.lesson:
                self._print_lesson(catalog.get(args.lesson))
                return 0

            if args.search is not None:
                matches = catalog.search(args.search)
                self.print(f"[bold green]🔍 找到 {len(matches)}/{len(catalog)} 篇课程[/bold green]")
                self._print_lessons(matches)
                return 0

            self._print_build_result(result)
            return 0

        except KeyboardInterrupt:
            self.print("\n[bold yellow]⚠️  用户中断[/bold yellow]")
            return 1
        except LessonNotFoundError as e:
            self.print(f"[bold yellow]⚠️  {escape(str(e))}[/bold yellow]")
            return 1
        except (LessonBuildError, FileNotFoundError, ValueError) as e:
            self.print(f"[bold red]❌ 构建失败: {escape(str(e))}[/bold red]")
            if args.verbose:
                self.console.print_exception()
            return 1

    def _print_lessons(self, lessons: list[Lesson]) -> None:
        """打印课程列表"""
        table = Table(title="课程列表")
        table.add_column("ID", style="cyan")
        table.add_column("标题", style="white")
        table.add_column("代码块", style="yellow")
        table.add_column("练习任务", style="magenta")
        table.add_column("关键词", style="green")

        for lesson in lessons:
            code = lesson.code_example.code
            block_count = code.count("/* --- Next Code Block --- */") + 1 if code else 0
            table.add_row(
                lesson.id,
                escape(lesson.title),
                str(block_count),
                str(len(lesson.exercise.mini_tasks)),
                ", ".join(lesson.keywords),
            )

        self.console.print(table)

    def _print_lesson(self, lesson: Lesson) -> None:
        """打印单篇课程详情"""
        table = Table(title=escape(lesson.title))
        table.add_column("项目", style="cyan")
        table.add_column("值", style="green")

        table.add_row("ID", lesson.id)
        table.add_row("路径", lesson.path)
        table.add_row("测验", escape(lesson.quiz.question))
        for option in lesson.quiz.options:
            marker = "✅" if option.id == lesson.quiz.correct_answer_id else "  "
            table.add_row(f"  {option.id}", f"{marker} {escape(option.text)}")
        table.add_row("练习", escape(lesson.exercise.title))
        for task in lesson.exercise.mini_tasks:
            table.add_row("  任务", escape(task.task))
        table.add_row("活动", escape(lesson.interactive_example.description))
        table.add_row("关键词", ", ".join(lesson.keywords))

        self.console.print(table)

    def _print_build_result(self, result: BuildResult) -> None:
        """打印构建结果"""
        self._print_lessons(result.lessons)
        self.print(f"\n[bold green]{result}[/bold green]")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="课程 Markdown 文档结构化系统",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
示例:
  # 按配置构建全部课程
  python main.py

  # 指定文档目录并校验输出
  python main.py --source content/lessons --check

  # 查看单篇课程
  python main.py --lesson what-is-nextjs

  # 检索课程
  python main.py --search routing
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        default="config/config.yaml",
        metavar="PATH",
        help="配置文件路径(默认: config/config.yaml)",
    )

    parser.add_argument(
        "--source",
        type=str,
        metavar="DIR",
        help="课程文档目录(覆盖配置文件)",
    )

    parser.add_argument(
        "--output-dir",
        type=str,
        metavar="PATH",
        help="输出目录(覆盖配置文件)",
    )

    parser.add_argument(
        "--lesson",
        type=str,
        metavar="ID",
        help="只显示指定 id 的课程",
    )

    parser.add_argument(
        "--search",
        type=str,
        metavar="TERM",
        help="按标题/关键词/正文检索课程",
    )

    parser.add_argument(
        "--reproducible",
        action="store_true",
        help="以课程 id 为种子洗牌测验选项",
    )

    parser.add_argument(
        "--check",
        action="store_true",
        help="校验构建出的课程记录",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="详细日志模式",
    )

    return parser


def main():
    """主函数"""
    parser = build_parser()
    args = parser.parse_args()

    if args.lesson and args.search is not None:
        print("错误: --lesson 和 --search 不能同时使用")
        sys.exit(1)

    # 运行 CLI
    cli = LessonTransformerCLI()
    exit_code = cli.run(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
