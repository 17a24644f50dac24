"""Example demonstrating a small screening round.

This example shows how to:
1. Load a BibTeX library as the item source
2. Define an extra review field next to the built-in ones
3. Record review values and read the statistics
4. Export the review table to CSV and JSON

Requirements:
    - Install: pip install -e .
"""
import os
import tempfile

from litreview import Config, LitReview

LIBRARY = """
@article{doe2020,
  title = {Screening tools for systematic reviews},
  author = {Doe, Jane and Smith, John},
  year = {2020},
  journal = {Research Synthesis Methods}
}

@inproceedings{lee2019,
  title = {Active learning for citation screening},
  author = {Lee, Kim},
  year = {2019},
  booktitle = {Proceedings of the Review Workshop}
}
"""


def main():
    workdir = tempfile.mkdtemp(prefix="litreview-")
    library_path = os.path.join(workdir, "library.bib")
    with open(library_path, "w", encoding="utf-8") as f:
        f.write(LIBRARY)

    config = Config(
        store_path=os.path.join(workdir, "prefs.json"),
        library_path=library_path,
        export_dir=workdir,
        locale="en",
    )
    review = LitReview(config=config)

    print("\n" + "=" * 60)
    print("Step 1: Review fields")
    print("=" * 60)
    design = review.add_field("Study design", type="select", options=["RCT", "Cohort", "Other"])
    for field in review.list_fields():
        print(f"  {field.id:<32} {field.type:<8} {field.name}")

    print("\n" + "=" * 60)
    print("Step 2: Screening")
    print("=" * 60)
    review.update_value(1, "relevance", "High")
    review.update_value(1, "included", True)
    review.update_value(1, design.id, "RCT")
    review.update_value(2, "relevance", "Low")
    review.update_value(2, "notes", "Out of scope, simulation only")

    stats = review.statistics()
    print(f"  {stats.total} records, {stats.included} included")

    print("\n" + "=" * 60)
    print("Step 3: Export")
    print("=" * 60)
    csv_path = review.export("csv")
    json_path = review.export("json")
    print(f"  ✓ CSV saved to {csv_path}")
    print(f"  ✓ JSON saved to {json_path}")

    with open(csv_path, encoding="utf-8") as f:
        print("\n" + f.read())


if __name__ == "__main__":
    main()
