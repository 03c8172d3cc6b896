"""Prepared input tables.

Each subdirectory is one family of input tables with a consistent structure:

    datasources/{name}/
    ├── __init__.py       # Public API re-exports
    └── {table}.py        # Dataclasses + load function for one CSV table

``tables.py`` holds the shared CSV plumbing on top of ``pandas.read_csv``:
header checks, missing-value tokens and strict numeric columns. Malformed
values are rejected here, at load time, so analysis code can assume clean
typed input.

Adding a new input table
------------------------
1. Create ``datasources/{name}/{table}.py`` with a loader::

       from benthic_affinity.datasources.tables import numeric_column, read_table

       def load_something(path: Path) -> list[SomeRecord]:
           frame = read_table(path, required=("key", "value"))
           values = numeric_column(frame, "value", path)
           return [
               SomeRecord(key=key, value=value)
               for key, value in zip(frame["key"], values, strict=True)
           ]

2. Re-export public API in ``__init__.py`` with ``__all__``.

3. Wire into the pipeline (see ``flows/summarize.py``):
   - Add a ``@task`` that resolves the path via the store and calls the loader
   - Add the task call to ``summarize_all()``

4. Add tests in ``tests/test_{name}.py``.
"""
