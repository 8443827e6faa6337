"""Authors of a manuscript, and the ordered collection that holds them."""

from typing import Any, Iterator, List, Optional

from dataclasses import dataclass, field, replace, fields

from ..exceptions import NoSuchAuthor


@dataclass(frozen=True)
class Author:
    """A single author of a manuscript."""

    author_id: int
    """Identifier that is unique and stable within a wizard session."""

    first_name: str = field(default_factory=str)
    middle_name: str = field(default_factory=str)
    last_name: str = field(default_factory=str)
    email: str = field(default_factory=str)
    affiliation: str = field(default_factory=str)
    country: str = field(default_factory=str)
    bio_statement: str = field(default_factory=str)

    is_principal: bool = field(default=False)
    """The principal contact receives correspondence about the manuscript."""


EDITABLE_FIELDS = frozenset(
    f.name for f in fields(Author) if f.name not in ('author_id',
                                                      'is_principal')
)
"""Author fields that may be changed with :meth:`AuthorList.update`."""


class AuthorList:
    """
    Ordered authors of a draft.

    This is the only place where authors are added, changed, or removed, so
    that there is always exactly one principal contact while the list is
    non-empty.
    """

    def __init__(self) -> None:
        """Start with no authors."""
        self._authors: List[Author] = []
        self._next_id = 1

    def __iter__(self) -> Iterator[Author]:
        return iter(list(self._authors))

    def __len__(self) -> int:
        return len(self._authors)

    def __getitem__(self, index: int) -> Author:
        return self._authors[index]

    def __repr__(self) -> str:
        return f'AuthorList({self._authors!r})'

    @property
    def principal(self) -> Optional[Author]:
        """The principal contact, if there are any authors."""
        for author in self._authors:
            if author.is_principal:
                return author
        return None

    def add(self, **values: Any) -> Author:
        """
        Append a new author.

        The first author on the list starts as the principal contact; all
        others start as non-principal.

        Parameters
        ----------
        values : kwargs
            Initial values for any of :const:`EDITABLE_FIELDS`.

        Returns
        -------
        :class:`.Author`

        Raises
        ------
        ValueError
            If a field that does not exist or cannot be set is passed.

        """
        self._check_fields(values)
        author = Author(author_id=self._next_id,
                        is_principal=not self._authors, **values)
        self._next_id += 1
        self._authors.append(author)
        return author

    def update(self, author_id: int, **values: Any) -> Author:
        """Replace the values of some fields on an author."""
        self._check_fields(values)
        index = self._index(author_id)
        self._authors[index] = replace(self._authors[index], **values)
        return self._authors[index]

    def delete(self, author_id: int) -> None:
        """
        Remove an author.

        Removing the only remaining author does nothing. If the principal
        contact is removed, the first remaining author becomes principal.
        """
        index = self._index(author_id)
        if len(self._authors) <= 1:
            return
        removed = self._authors.pop(index)
        if removed.is_principal:
            self._authors[0] = replace(self._authors[0], is_principal=True)

    def set_principal(self, author_id: int) -> None:
        """Make one author the principal contact, and no one else."""
        self._index(author_id)
        self._authors = [
            replace(author, is_principal=author.author_id == author_id)
            for author in self._authors
        ]

    def clear(self) -> None:
        """Remove all authors."""
        self._authors = []

    def _index(self, author_id: int) -> int:
        for i, author in enumerate(self._authors):
            if author.author_id == author_id:
                return i
        raise NoSuchAuthor(f'No such author: {author_id}')

    @staticmethod
    def _check_fields(values: dict) -> None:
        unknown = set(values) - EDITABLE_FIELDS
        if unknown:
            raise ValueError(f'Unknown author fields: {sorted(unknown)}')
