import sys

from pbdocs.combined_exporter import export_combined


def main():
    out_file = export_combined()
    if out_file:
        print(f"\n✅ Combined Markdown export complete: {out_file}")
    else:
        print("\n❌ Combined Markdown export failed")
        sys.exit(1)


if __name__ == "__main__":
    main()
