import array
from typing import Generic, Iterable, Iterator, List, Protocol, TypeVar

from .errors import IndexOutOfRange, InvalidCapacity


WORD_SIZE = 64


class IndexAssignable(Protocol):
    """
    Anything storable in an IndexedSet.

    ``index()`` must map every value of the type to a unique integer,
    starting at 0 and contiguous over the type's domain.
    """

    def index(self) -> int:
        ...


T = TypeVar("T", bound=IndexAssignable)


class IndexedSet(Generic[T]):
    """Fixed-capacity bit set keyed by each element's dense index."""

    def __init__(self, capacity: int):
        if capacity < 1:
            raise InvalidCapacity(capacity)
        self.word_count = (capacity + WORD_SIZE - 1) // WORD_SIZE
        self.words = array.array("Q")  # 64-bit integers
        self.words.extend([0] * self.word_count)

    @property
    def capacity(self) -> int:
        return self.word_count * WORD_SIZE

    def insert(self, element: T):
        index = self._validate(element)
        self.words[index // WORD_SIZE] |= (1 << (index % WORD_SIZE))

    def remove(self, element: T):
        index = self._validate(element)
        self.words[index // WORD_SIZE] &= ~(1 << (index % WORD_SIZE)) & 0xFFFFFFFFFFFFFFFF

    def contains(self, element: T) -> bool:
        index = self._validate(element)
        return bool(self.words[index // WORD_SIZE] & (1 << (index % WORD_SIZE)))

    def insert_all(self, elements: Iterable[T]):
        for element in elements:
            self.insert(element)

    def remove_all(self, elements: Iterable[T]):
        for element in elements:
            self.remove(element)

    def contains_all(self, elements: Iterable[T]) -> bool:
        return all(self.contains(element) for element in elements)

    def contains_any(self, elements: Iterable[T]) -> bool:
        return any(self.contains(element) for element in elements)

    def cardinality(self) -> int:
        count = 0
        for word in self.words:
            n = word
            while n:
                n &= n - 1
                count += 1
        return count

    def union(self, other: "IndexedSet[T]") -> "IndexedSet[T]":
        """New set sized to the larger operand; the shorter one is zero-extended."""
        result = IndexedSet(max(self.capacity, other.capacity))
        for i in range(result.word_count):
            word_a = self.words[i] if i < self.word_count else 0
            word_b = other.words[i] if i < other.word_count else 0
            result.words[i] = word_a | word_b
        return result

    def intersection(self, other: "IndexedSet[T]") -> "IndexedSet[T]":
        """New set sized to the smaller operand."""
        result = IndexedSet(min(self.capacity, other.capacity))
        for i in range(result.word_count):
            result.words[i] = self.words[i] & other.words[i]
        return result

    def jaccard(self, other: "IndexedSet[T]") -> float:
        """|A & B| / |A | B|; two empty sets count as identical (1.0)."""
        union_count = self.union(other).cardinality()
        if union_count == 0:
            return 1.0
        return self.intersection(other).cardinality() / union_count

    def indices(self) -> List[int]:
        found = []
        for word_idx, word in enumerate(self.words):
            bit_idx = 0
            while word:
                if word & 1:
                    found.append(word_idx * WORD_SIZE + bit_idx)
                word >>= 1
                bit_idx += 1
        return found

    def _validate(self, element: T) -> int:
        index = element.index()
        if not 0 <= index < self.capacity:
            raise IndexOutOfRange(index, self.capacity)
        return index

    def __contains__(self, element: T) -> bool:
        return self.contains(element)

    def __len__(self) -> int:
        return self.cardinality()

    def __iter__(self) -> Iterator[int]:
        return iter(self.indices())

    def __repr__(self) -> str:
        return f"IndexedSet(capacity={self.capacity}, cardinality={self.cardinality()})"

    def __str__(self) -> str:
        return "{" + ", ".join(str(i) for i in self.indices()) + "}"
