"""
Entry point and facade for the report text → paginated document pipeline.

Packages:
- reportgen.layout: line classification, table accumulation, page flow, finishing
- reportgen.render: font registration, text measurement and wrapping
- reportgen.docs: document model, PDF/DOCX writers, content readers, pipeline
- reportgen.llm: OpenRouter client helpers and report-content generation
"""

from __future__ import annotations

from reportgen.config import load_settings

# Layout core
from reportgen.layout import (
    classify_line,
    iter_blocks,
    strip_markup,
    PageFlow,
    LayoutOverflow,
    finish_document,
)

# Documents
from reportgen.docs.pipeline import (
    build_document,
    render_report,
    process_content_file,
    safe_file_name,
)
from reportgen.docs.buffer import OutputWriteError
from reportgen.docs.txt import read_content

# LLM content producer
from reportgen.llm import (
    get_picked_model,
    get_openrouter_client,
    generate_report_content,
)

__all__ = [
    "load_settings",
    "classify_line",
    "iter_blocks",
    "strip_markup",
    "PageFlow",
    "LayoutOverflow",
    "finish_document",
    "build_document",
    "render_report",
    "process_content_file",
    "safe_file_name",
    "OutputWriteError",
    "read_content",
    "get_picked_model",
    "get_openrouter_client",
    "generate_report_content",
]


def _cli() -> None:
    """CLI for report rendering.

    --title / -t: Report title (also the default output file name)
    --file / -f: Content file (txt|md|html|docx)
    --text: Content given inline
    --prompt / -p: Generate the content with the configured model from this command
    --context-file: Source data passed to the model together with --prompt
    --out-name / -o: Output file name override (without extension)
    --out-dir: Output directory (default: current directory)
    --out-format: pdf|docx (default: pdf)
    --config: Path to report.json (default: config/report.json)
    --timeout: Model request timeout seconds (<=0 means no timeout)
    """
    import argparse

    parser = argparse.ArgumentParser(description="Render loosely formatted report text into a paginated PDF.")
    parser.add_argument("--title", "-t", type=str, help="Report title")
    parser.add_argument("--file", "-f", type=str, help="Path to content file (txt|md|html|docx)")
    parser.add_argument("--text", type=str, help="Report content given inline")
    parser.add_argument("--prompt", "-p", type=str, help="Generate the content with the configured model")
    parser.add_argument("--context-file", type=str, help="Source data for --prompt")
    parser.add_argument("--out-name", "-o", type=str, help="Output file name override")
    parser.add_argument("--out-dir", type=str, default=".", help="Output directory (default: .)")
    parser.add_argument("--out-format", type=str, default="pdf", choices=["pdf", "docx"], help="Output format (default: pdf)")
    parser.add_argument("--config", type=str, help="Path to report.json")
    parser.add_argument("--timeout", type=float, default=120.0, help="Model request timeout in seconds (default: 120.0)")

    args = parser.parse_args()
    settings = load_settings(args.config)

    if args.prompt:
        context = read_content(args.context_file) if args.context_file else ""
        timeout_value = None if args.timeout is not None and args.timeout <= 0 else args.timeout
        try:
            model, api_key = get_picked_model()
            client = get_openrouter_client(api_key)
            content = generate_report_content(client, model, args.prompt, context, timeout=timeout_value)
        except (OSError, ValueError, RuntimeError) as e:
            print(f"Failed to generate report: {e}")
            raise SystemExit(1)
    elif args.file:
        content = read_content(args.file)
    elif args.text:
        content = args.text
    else:
        print("Please provide report content with --file, --text or --prompt.")
        print('Examples:\n  python main.py --title "Evolution Report" --file report.txt\n'
              '  python main.py --title "Monthly Report" --prompt "Summarize the last month" --context-file data.txt')
        raise SystemExit(2)

    title = args.title or "Report"
    try:
        path = render_report(
            title=title,
            content=content,
            file_name=args.out_name,
            out_dir=args.out_dir,
            settings=settings,
            out_format=args.out_format,
        )
    except Exception as e:
        print(f"Failed to export {args.out_format.upper()}: {e}")
        raise SystemExit(1)
    print(f"{args.out_format.upper()} exported: {path}")


if __name__ == "__main__":
    _cli()
