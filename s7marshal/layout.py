"""
Read and write named fields of a PLC buffer described by a layout.

A layout is the byte layout of a DB as shown in the dataview of the PLC
programming software::

    # Byte index    Variable name  Datatype
    layout = \"\"\"
    4             ID             INT
    6             NAME           STRING[6]

    14.0          test_bool1     BOOL
    14.1          test_bool2     BOOL
    15            testReal       REAL
    19            testDword      DWORD
    \"\"\"

The buffer is only borrowed for the duration of a call::

    >>> values = read_layout(data, layout, layout_offset=4)
    >>> values["ID"]
    12
    >>> data = write_layout(data, layout, {"ID": 13, "test_bool1": True}, layout_offset=4)

Byte indexes in the layout are relative: a field at index ``i`` is found at
``db_offset + i - layout_offset`` in the buffer.
"""

from logging import getLogger
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from .datatypes import CATALOG, get_value, parse_type, set_value
from .util.address import parse_address

logger = getLogger(__name__)

Specification = Dict[str, Tuple[str, str]]


def parse_specification(db_specification: str) -> Specification:
    """Create a db specification derived from a
        dataview of a db in which the byte layout
        is specified

    Args:
        db_specification: string formatted table with the indexes, aliases and types.

    Raises:
        :obj:`ValueError`: if a line does not hold exactly an index, a name and a type.

    Returns:
        Parsed DB specification, name -> (index, type).
    """
    parsed_db_specification = {}

    for line in db_specification.split("\n"):
        fields = line.split("#")[0].split()
        if not fields:
            continue
        if len(fields) != 3:
            raise ValueError(f"Layout line {line.strip()!r} should hold an index, a name and a type")
        index, var_name, _type = fields
        parsed_db_specification[var_name] = (index, _type)

    return parsed_db_specification


def _specification(specification: Union[str, Mapping[str, Tuple[str, str]]]) -> Mapping[str, Tuple[str, str]]:
    if isinstance(specification, str):
        return parse_specification(specification)
    return specification


def _field(
    index: str, type_: str, layout_offset: int, db_offset: int
) -> Tuple[int, str, Optional[int]]:
    byte_index, bool_index = parse_address(index)
    s7type, _ = parse_type(type_)
    if CATALOG[s7type].bit_addressed and bool_index is None:
        raise ValueError(f"{type_} at {index} needs a bit index like {index}.0")
    return byte_index - layout_offset + db_offset, type_, bool_index


def read_layout(
    bytearray_: bytearray,
    specification: Union[str, Mapping[str, Tuple[str, str]]],
    layout_offset: int = 0,
    db_offset: int = 0,
) -> Dict[str, Any]:
    """Export dictionary with values

    Args:
        bytearray_: buffer to read from.
        specification: layout text or parsed specification.
        layout_offset: byte index in the layout that corresponds with `db_offset`.
        db_offset: byte index in the buffer where the layout starts.

    Returns:
        dictionary containing the value of each field of the layout.
    """
    values = {}
    for var_name, (index, _type) in _specification(specification).items():
        byte_index, type_, bool_index = _field(index, _type, layout_offset, db_offset)
        values[var_name] = get_value(bytearray_, byte_index, type_, bool_index)
    return values


def write_layout(
    bytearray_: bytearray,
    specification: Union[str, Mapping[str, Tuple[str, str]]],
    values: Mapping[str, Any],
    layout_offset: int = 0,
    db_offset: int = 0,
) -> bytearray:
    """Write named values to the buffer.

    All values are encoded before the buffer is changed, so if one of them
    fails nothing is written.

    Args:
        bytearray_: buffer to write to.
        specification: layout text or parsed specification.
        values: name -> value of the fields to write, other fields are left untouched.
        layout_offset: byte index in the layout that corresponds with `db_offset`.
        db_offset: byte index in the buffer where the layout starts.

    Raises:
        :obj:`KeyError`: if a name is not part of the layout.

    Returns:
        The buffer.
    """
    specification = _specification(specification)
    unknown = [name for name in values if name not in specification]
    if unknown:
        raise KeyError(f"Fields {', '.join(unknown)} are not part of the layout")

    scratch = bytearray(bytearray_)
    for var_name, value in values.items():
        index, _type = specification[var_name]
        byte_index, type_, bool_index = _field(index, _type, layout_offset, db_offset)
        set_value(scratch, byte_index, type_, value, bool_index)
        logger.debug(f"{var_name} at byte {byte_index} set to {value!r}")

    bytearray_[:] = scratch
    return bytearray_
