"""
Tabular dataset for pylinreg.

DataSource is the "I have data" abstraction: named, row-aligned numeric
columns. It doesn't know it will feed a regression. The formula builder
pulls columns out of it by name; the core itself only ever sees the
resulting arrays.

Usage:
    from pylinreg import DataSource

    ds = DataSource.from_arrays(x=[1, 2, 3], y=[2, 4, 6])
    ds = DataSource.from_file("cars.csv")
    ds = DataSource.from_dataframe(df, name="mtcars")

    ds.keys()  # frozenset({'x', 'y'})
    x = ds['x']
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylinreg.core.exceptions import ValidationError, MalformedDatasetError

if TYPE_CHECKING:
    import pandas as pd


@dataclass(frozen=True)
class DataSource:
    """
    Named columns of equal length. Immutable.

    Construct via factory classmethods, not directly.
    """
    _data: dict[str, NDArray[np.floating[Any]]]
    _metadata: dict[str, Any] = field(default_factory=dict)

    # === Column Access ===

    def keys(self) -> frozenset[str]:
        """Return the names of all columns."""
        return frozenset(self._data.keys())

    def __getitem__(self, key: str) -> NDArray[np.floating[Any]]:
        """
        Access a named column.

        Raises:
            KeyError: If key not found, with a message listing available keys

        Example:
            >>> ds = DataSource.from_arrays(x=x, y=y)
            >>> ds['z']  # KeyError: "DataSource has no column 'z'. Available: ['x', 'y']"
        """
        if key not in self._data:
            raise KeyError(
                f"DataSource has no column '{key}'. Available: {sorted(self.keys())}"
            )
        return self._data[key]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def to_dict(self) -> dict[str, NDArray[np.floating[Any]]]:
        """Shallow copy of the columns as a plain dict (what patsy consumes)."""
        return dict(self._data)

    # === Properties ===

    @property
    def n_observations(self) -> int:
        """Number of rows."""
        return self._metadata.get('n_observations', 0)

    @property
    def name(self) -> str | None:
        """Dataset label used in printed model headers, if one was given."""
        return self._metadata.get('name')

    @property
    def metadata(self) -> dict[str, Any]:
        return self._metadata.copy()

    # === Factory Methods ===

    @classmethod
    def from_arrays(cls, *, name: str | None = None, **columns: ArrayLike) -> DataSource:
        """Construct from 1-D array-likes passed as keyword arguments."""
        if not columns:
            raise MalformedDatasetError("DataSource needs at least one column")

        storage = {key: _as_column(values, key) for key, values in columns.items()}
        n_obs = _common_length(storage)

        metadata: dict[str, Any] = {'n_observations': n_obs, 'source': 'arrays'}
        if name is not None:
            metadata['name'] = name
        return cls(_data=storage, _metadata=metadata)

    @classmethod
    def from_dataframe(
        cls,
        df: 'pd.DataFrame',
        *,
        name: str | None = None,
        source_path: str | None = None,
    ) -> DataSource:
        """Construct from a pandas DataFrame; every column must be numeric."""
        storage = {str(col): _as_column(df[col].to_numpy(), str(col)) for col in df.columns}

        metadata: dict[str, Any] = {
            'n_observations': len(df),
            'source': 'dataframe',
            'columns': [str(c) for c in df.columns],
        }
        if source_path:
            metadata['source_path'] = source_path
        if name is not None:
            metadata['name'] = name
        return cls(_data=storage, _metadata=metadata)

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        columns: list[str] | None = None,
        name: str | None = None,
    ) -> DataSource:
        """
        Construct from file (CSV, TSV, NPY).

        The dataset label defaults to the file stem, so a model fitted on
        ``cars.csv`` prints ``data = cars``.
        """
        path = Path(path)
        suffix = path.suffix.lower()
        label = name if name is not None else path.stem

        if suffix in ('.csv', '.tsv'):
            import pandas as pd
            sep = '\t' if suffix == '.tsv' else ','
            df = pd.read_csv(path, usecols=columns, sep=sep)
            return cls.from_dataframe(df, name=label, source_path=str(path))
        elif suffix == '.npy':
            data = np.load(path)
            if data.ndim != 2:
                raise MalformedDatasetError(
                    f"{path}: expected a 2D array, got shape {data.shape}"
                )
            if columns is None:
                columns = [f"V{i + 1}" for i in range(data.shape[1])]
            if len(columns) != data.shape[1]:
                raise MalformedDatasetError(
                    f"{path}: {data.shape[1]} columns but {len(columns)} names given"
                )
            return cls.from_arrays(
                name=label, **{col: data[:, i] for i, col in enumerate(columns)}
            )
        else:
            raise ValidationError(f"Unknown file format: {suffix}")


def _as_column(values: ArrayLike, key: str) -> NDArray[np.floating[Any]]:
    """Coerce one column to float64, rejecting text and nested data."""
    try:
        arr = np.asarray(values, dtype=np.float64)
    except (ValueError, TypeError) as e:
        raise MalformedDatasetError(f"column '{key}': not numeric: {e}") from e
    if arr.ndim != 1:
        raise MalformedDatasetError(
            f"column '{key}': expected 1D values, got shape {arr.shape}"
        )
    return arr


def _common_length(storage: dict[str, NDArray[np.floating[Any]]]) -> int:
    lengths = {key: arr.shape[0] for key, arr in storage.items()}
    if len(set(lengths.values())) > 1:
        details = ", ".join(f"{k}={v}" for k, v in lengths.items())
        raise MalformedDatasetError(f"Columns have unequal lengths: {details}")
    return next(iter(lengths.values()))
