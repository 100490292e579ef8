"""TSV file loader."""
from email_validation_core.ingest.loaders.csv import CSVLoader


class TSVLoader(CSVLoader):
    """Loader for TSV (tab-separated values) files."""

    name = "tsv"
    suffix = ".tsv"
    sep = "\t"

    def detect(self, head: bytes, suffix: str) -> bool:
        if suffix != self.suffix:
            return False
        first_line = head.decode("utf-8", errors="replace").split("\n")[0]
        # TSV should have at least one tab in the header
        if "\t" not in first_line:
            return False
        return super().detect(head, suffix)
