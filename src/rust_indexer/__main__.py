from rust_indexer.cli import app

app(prog_name="rust-indexer")
