import sys

from pbdocs.markdown_exporter import export_markdown


def main():
    out_dir = export_markdown()
    if out_dir:
        print(f"\n✅ Markdown export complete at: {out_dir}")
    else:
        print("\n❌ Markdown export failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
