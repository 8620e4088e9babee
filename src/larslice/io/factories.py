"""Functions that instantiate IO tools from configuration blocks."""

from larslice.utils.factory import instantiate, module_dict

from . import read

READER_DICT = module_dict(read)

__all__ = ["reader_factory"]


def reader_factory(reader_cfg, parent_path=None):
    """Instantiates reader based on type specified in configuration under
    `io.reader.name`. The name must match the name of a class under
    `larslice.io.read`.

    Parameters
    ----------
    reader_cfg : dict
        Reader configuration dictionary
    parent_path : str, optional
        Directory against which relative input paths are resolved

    Returns
    -------
    object
        Reader object
    """
    return instantiate(READER_DICT, reader_cfg, parent_path=parent_path)
