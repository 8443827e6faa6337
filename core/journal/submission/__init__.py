"""
Core workflow for submitting a manuscript to the journal.

Authors submit a manuscript by working through a wizard with five steps:

1. **Start**: confirm the submission checklist and acknowledge the copyright
   notice. Comments for the editor may be added.
2. **Upload submission**: attach the manuscript file (DOC, DOCX, PDF or RTF,
   at most 20MB).
3. **Enter metadata**: title, abstract, authors, keywords, language, funding
   agencies and references.
4. **Upload supplementary files**: optional supporting documents.
5. **Confirmation**: review everything and submit.

A wizard session is represented by a :class:`.StepSequencer`, which owns the
:class:`.SubmissionDraft` being built. Each mutation of the draft belongs to
one step, and is refused while another step is active. Leaving a step
requires that its gate (see :mod:`.gate`) finds no errors; going back never
requires anything.

.. code-block:: python

   from journal.submission import begin, User, ChecklistItem

   session = begin(User('1234', email='someone@example.org'))
   for item in ChecklistItem:
       session.check_item(item)
   session.agree_to_copyright()
   outcome = session.advance()

When the session reaches confirmation, :meth:`.StepSequencer.finish`
assembles an immutable :class:`.Submission` (see :mod:`.assembler`) and hands
it to a :class:`.SubmissionClient`. The default client,
:class:`.ManuscriptService`, posts it to the manuscript API.

Configuration is read from the Flask application config when there is an
application context, and from the environment otherwise. See :mod:`.config`.
"""

from .core import begin, init_app
from .domain import Agent, User, Client, Author, SubmissionDraft, \
    ChecklistItem, Language, FileRef, UploadedFile, ValidationOutcome, \
    Submission
from .domain.step import Step
from .exceptions import InvalidTransition, StepNotActive, NoSuchAuthor, \
    AssemblyFailed, SubmitError, ValidationRejected, TransientFailure, Fatal
from .sequencer import StepSequencer, FinishResult, FinishStatus
