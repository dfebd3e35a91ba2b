from __future__ import annotations

from typing import Callable, Iterable, Mapping, TypeVar, Union

TV = TypeVar("TV")

TPair = tuple[str, str]
TTokenizer = Callable[..., Iterable[TPair]]
TRawQuery = Union[str, bytes]
TMultiMapping = Mapping[str, Iterable[TV]]
TSingleMapping = Mapping[str, TV]
