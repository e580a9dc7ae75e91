"""CLI for flashcards, quizzes and the study buddy."""
import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel

from studyai.cli.planner import configure_logging
from studyai.tools.sessions import ChatHistory, FlashcardDeck, QuizSession
from studyai.tools.study_aids import ask_study_buddy, generate_flashcards, generate_quiz


console = Console()


def read_text(text: str | None, file: Path | None) -> str:
    """Input text from --file, or the positional argument."""
    if file is not None:
        if not file.exists():
            console.print(f"[red]Error: file not found: {file}[/red]")
            sys.exit(1)
        return file.read_text(encoding="utf-8")
    return text or ""


def run_flashcards(notes: str) -> None:
    with console.status("Generating flashcards..."):
        flashcards, error = generate_flashcards(notes)
    if error:
        console.print(f"[red]✗ {error}[/red]")
        sys.exit(1)
    if not flashcards:
        console.print("No flashcards generated. Paste some notes first.")
        return

    deck = FlashcardDeck(flashcards)
    while True:
        side = "Answer" if deck.flipped else "Question"
        console.print(Panel(deck.visible_text, title=f"Card {deck.index + 1}/{len(deck.cards)} - {side}"))
        choice = console.input("[dim](f)lip, (n)ext, (p)rev, (q)uit[/dim] > ").strip().lower()
        if choice == "f":
            deck.flip()
        elif choice == "n":
            deck.next_card()
        elif choice == "p":
            deck.prev_card()
        elif choice == "q":
            break


def run_quiz(text: str) -> None:
    with console.status("Generating quiz..."):
        questions, error = generate_quiz(text)
    if error:
        console.print(f"[red]✗ {error}[/red]")
        sys.exit(1)
    if not questions:
        console.print("No quiz generated. Provide some study material first.")
        return

    session = QuizSession(questions)
    while not session.finished:
        question = session.current
        console.print(f"\n[bold]Question {session.index + 1} of {session.total}[/bold]")
        console.print(question.question)
        for i, option in enumerate(question.options):
            console.print(f"  {i + 1}. {option}")

        choice = console.input("> ").strip()
        if not choice.isdigit() or not 1 <= int(choice) <= len(question.options):
            console.print("[yellow]Pick one of the option numbers[/yellow]")
            continue

        if session.select_answer(int(choice) - 1):
            console.print("[green]✓ Correct[/green]")
        else:
            console.print(f"[red]✗ Incorrect[/red] - answer: {question.options[question.correct]}")
        if question.explanation:
            console.print(f"[dim]{question.explanation}[/dim]")

    console.print(f"\n[bold green]Quiz complete![/bold green] Score: {session.score}/{session.total} "
                  f"({session.percentage:.0f}%)")


def run_study_buddy(question: str) -> None:
    history = ChatHistory()
    while True:
        if not question.strip():
            question = console.input("[bold]Ask a question[/bold] (blank to quit) > ")
            if not question.strip():
                break

        with console.status("Thinking..."):
            answer, error = ask_study_buddy(question)
        if error:
            console.print(f"[red]✗ {error}[/red]")
        elif history.record(question, answer):
            console.print(Panel(answer, title="Study Buddy"))
        question = ""


def main(argv=None):
    load_dotenv()
    parser = argparse.ArgumentParser(description="Flashcards, quizzes and a study buddy")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose logging")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    flashcards = sub.add_parser("flashcards", help="Make flashcards from notes")
    flashcards.add_argument("notes", nargs="?", help="Study notes")
    flashcards.add_argument("--file", type=Path, help="Read notes from a file")

    quiz = sub.add_parser("quiz", help="Create a quiz from study material")
    quiz.add_argument("text", nargs="?", help="Study material")
    quiz.add_argument("--file", type=Path, help="Read material from a file")

    ask = sub.add_parser("ask", help="Ask the study buddy a question")
    ask.add_argument("question", nargs="?", default="", help="Your question")

    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.debug)

    if args.command == "flashcards":
        run_flashcards(read_text(args.notes, args.file))
    elif args.command == "quiz":
        run_quiz(read_text(args.text, args.file))
    else:
        run_study_buddy(args.question)


if __name__ == "__main__":
    main()
