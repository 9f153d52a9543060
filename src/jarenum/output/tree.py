"""Rich tree visualization for enum reports."""

from collections import defaultdict

from rich.console import Console
from rich.markup import escape
from rich.text import Text
from rich.tree import Tree

console = Console(stderr=True)


def build_report_tree(enums: list[dict], title: str = "Enums") -> Tree:
    """Build a Rich tree of enums grouped by the archive they came from.

    Takes serialized records so saved reports render the same way as
    fresh ones.
    """
    by_source: dict[str, list[dict]] = defaultdict(list)
    for record in enums:
        by_source[record["source"]].append(record)

    root = Tree(f"[bold]{escape(title)}[/] ({len(enums)} found)", guide_style="dim")

    # Archives appear in discovery order
    for source, records in by_source.items():
        source_node = root.add(f"[bold blue]{escape(source)}[/] ({len(records)})")
        for record in records:
            label = Text()
            label.append(record["class_name"], style="yellow")
            if record.get("avro_generated"):
                label.append(" @AvroGenerated", style="magenta")
            enum_node = source_node.add(label)
            for member in record["members"]:
                enum_node.add(Text(member, style="dim"))

    return root


def build_summary_tree(data: dict) -> Tree:
    """Build a short summary from a serialized report."""
    enums = data.get("enums", [])
    metadata = data.get("metadata", {})
    stats = metadata.get("stats", {})

    root = Tree(f"[bold]{escape(metadata.get('archive', 'Scan summary'))}[/]", guide_style="dim")
    root.add(f"Enums found: [cyan]{len(enums)}[/]")
    root.add(f"Marked enums: [magenta]{sum(1 for e in enums if e.get('avro_generated'))}[/]")
    if stats:
        root.add(f"Archives visited: {stats.get('archives_visited', 0)}")
        root.add(f"Classes parsed: {stats.get('classes_accepted', 0)}")
        root.add(f"Classes filtered out: {stats.get('classes_rejected', 0)}")
        if stats.get("duplicates_dropped"):
            root.add(f"[yellow]Duplicates dropped: {stats['duplicates_dropped']}[/]")
        if stats.get("index_entries_missing"):
            root.add(f"[yellow]Missing index entries: {stats['index_entries_missing']}[/]")
    return root


def display_tree(tree: Tree) -> None:
    """Display the tree to console."""
    console.print()
    console.print(tree)
    console.print()
