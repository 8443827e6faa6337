"""JSON serialization for submission core."""

import json
from datetime import datetime, date
from enum import Enum
from typing import Any

from dataclasses import asdict
from dateutil import parser as dateparser

from .domain.agent import Agent, agent_factory
from .domain.author import Author
from .domain.draft import ChecklistItem, Language
from .domain.files import FileRef
from .domain.submission import Submission


class SubmissionJSONEncoder(json.JSONEncoder):
    """Encodes domain objects in this package for serialization."""

    def default(self, obj: object) -> Any:
        """Look for domain objects, and use their dict-coercion methods."""
        if isinstance(obj, Submission):
            data = {
                'submission_id': obj.submission_id,
                'created': obj.created,
                'creator': obj.creator,
                'checklist': list(obj.checklist),
                'copyright_agreed': obj.copyright_agreed,
                'comments': obj.comments,
                'authors': list(obj.authors),
                'title': obj.title,
                'abstract': obj.abstract,
                'keywords': list(obj.keywords),
                'language': obj.language,
                'agencies': list(obj.agencies),
                'references': list(obj.references),
                'primary_file': obj.primary_file,
                'supplementary_files': list(obj.supplementary_files),
            }
            data['__type__'] = 'submission'
        elif isinstance(obj, FileRef):
            data = {
                'file_id': obj.file_id,
                'original_file_name': obj.original_file_name,
                'mime_type': obj.mime_type,
                'size_bytes': obj.size_bytes,
                'uploaded_at': obj.uploaded_at,
            }
            if isinstance(obj.handle, str):
                data['handle'] = obj.handle
            data['__type__'] = 'file'
        elif isinstance(obj, Author):
            data = asdict(obj)
            data['__type__'] = 'author'
        elif isinstance(obj, Agent):
            data = asdict(obj)
            data['agent_type'] = obj.agent_type
            data['__type__'] = 'agent'
        elif isinstance(obj, (datetime, date)):
            data = obj.isoformat()
        elif isinstance(obj, Enum):
            data = obj.value
        else:
            data = super(SubmissionJSONEncoder, self).default(obj)
        return data


class SubmissionJSONDecoder(json.JSONDecoder):
    """Decode :class:`.Submission` and other domain objects from JSON data."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Pass :func:`object_hook` to the base constructor."""
        kwargs['object_hook'] = kwargs.get('object_hook', self.object_hook)
        super(SubmissionJSONDecoder, self).__init__(*args, **kwargs)

    def object_hook(self, obj: dict, **extra: Any) -> Any:
        """Decode domain objects in this package."""
        if '__type__' not in obj:
            return obj
        obj_type = obj.pop('__type__')
        if obj_type == 'agent':
            return agent_factory(**obj)
        if obj_type == 'author':
            return Author(**obj)
        if obj_type == 'file':
            obj['uploaded_at'] = dateparser.parse(obj['uploaded_at'])
            return FileRef(**obj)
        if obj_type == 'submission':
            obj['created'] = dateparser.parse(obj['created'])
            obj['language'] = Language(obj['language'])
            obj['checklist'] = tuple(ChecklistItem(item)
                                     for item in obj['checklist'])
            for key in ('authors', 'keywords', 'agencies', 'references',
                        'supplementary_files'):
                obj[key] = tuple(obj[key])
            return Submission(**obj)
        return obj


def dumps(obj: Any) -> str:
    """Generate JSON from a Python object."""
    return json.dumps(obj, cls=SubmissionJSONEncoder)


def loads(data: str) -> Any:
    """Load a Python object from JSON."""
    return json.loads(data, cls=SubmissionJSONDecoder)
