from sqlalchemy import UniqueConstraint


def get_unique_column_sets(model) -> list[tuple[str, ...]]:
    """
    Return the unique column sets declared on the model's table, in declaration order
    and without repeats. Covers:
      - Column(unique=True)
      - UniqueConstraint in the table
      - Index(..., unique=True)
    """
    unique_sets: list[tuple[str, ...]] = []

    def _add(cols):
        cols = tuple(cols)
        if cols not in unique_sets:
            unique_sets.append(cols)

    for col in model.__table__.columns:
        if col.unique:
            _add([col.name])

    for constraint in model.__table__.constraints:
        if isinstance(constraint, UniqueConstraint):
            _add(c.name for c in constraint.columns)

    for idx in model.__table__.indexes:
        if idx.unique:
            _add(c.name for c in idx.columns)

    return unique_sets


def get_single_unique_columns(model) -> tuple[str, ...]:
    """
    Columns that are unique on their own (multi-column sets are skipped).
    """
    return tuple(cols[0] for cols in get_unique_column_sets(model) if len(cols) == 1)
