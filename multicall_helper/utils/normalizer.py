from typing import Any

from multicall_helper.utils.abi import AbiResult


def normalize(x: Any) -> Any:
    """
    Recursively converts a decoded ABI value into plain Python values.

    Named structs become dicts, unnamed tuples and arrays become lists, and
    scalars (int, str, bool, bytes) are returned unchanged.

    Args:
        x: An AbiResult tree, a list/tuple possibly holding AbiResults, or a scalar.

    Returns:
        Any: A value made only of scalars, lists and dicts.
    """
    if isinstance(x, AbiResult):
        if x.is_struct:
            return {name: normalize(value) for name, value in x.to_dict().items()}
        return [normalize(value) for value in x.to_list()]

    # elements of plain sequences may still be AbiResults
    if isinstance(x, (list, tuple)):
        return [normalize(value) for value in x]

    if isinstance(x, dict):
        return {key: normalize(value) for key, value in x.items()}

    return x
