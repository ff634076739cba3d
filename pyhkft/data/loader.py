"""
Access to the CSV tables packaged with pyhkft.

element.csv gives the molar mass of each element and the standard entropy
of its reference state at 298.15 K and 1 bar, used for molecular weights and
for converting formation properties to absolute chemical potentials.
"""

import pandas as pd
from pathlib import Path
from typing import Optional, Union, Dict


class DataLoader:
    """
    Read and cache the CSV files in a data directory.

    Parameters
    ----------
    data_path : str or Path, optional
        Directory of the data files; by default the directory of this module

    Cached tables are handed out as copies, so callers may modify them.
    """

    ENCODINGS = ('utf-8', 'latin-1')

    def __init__(self, data_path: Optional[Union[str, Path]] = None):
        self.data_path = Path(data_path) if data_path is not None else Path(__file__).parent
        if not self.data_path.is_dir():
            raise FileNotFoundError(f"data directory not found: {self.data_path}")
        self._cache: Dict[str, pd.DataFrame] = {}

    def _read_csv(self, filepath: Path) -> pd.DataFrame:
        for encoding in self.ENCODINGS:
            try:
                return pd.read_csv(filepath, encoding=encoding)
            except UnicodeDecodeError:
                continue
        raise IOError(f"could not decode {filepath} as {' or '.join(self.ENCODINGS)}")

    def load_data_file(self, filename: str, use_cache: bool = True) -> pd.DataFrame:
        """
        Read a data file, from the cache if it was read before.

        Parameters
        ----------
        filename : str
            Name of the file in the data directory (e.g. 'element.csv')
        use_cache : bool, default True
            Use and fill the cache

        Returns
        -------
        pandas.DataFrame
        """
        if use_cache and filename in self._cache:
            return self._cache[filename].copy()
        filepath = self.data_path / filename
        if not filepath.is_file():
            raise FileNotFoundError(f"data file not found: {filepath}")
        table = self._read_csv(filepath)
        table.columns = [str(col).strip() for col in table.columns]
        if use_cache:
            self._cache[filename] = table.copy()
        return table

    def load_elements(self, use_cache: bool = True) -> pd.DataFrame:
        """
        Element table: element, state, source, mass (g mol-1), s and n, where
        s is the entropy (cal K-1 mol-1) of n atoms in the reference state.
        """
        return self.load_data_file('element.csv', use_cache=use_cache)
