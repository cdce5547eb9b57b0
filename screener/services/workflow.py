"""
Workflow Controller: resume upload, role selection, scoring and role creation
"""
from typing import List, Optional

from screener.models.rubric import MatchResult, UploadedResume
from screener.models.workflow import (
    SubmissionPhase,
    DialogPhase,
    DraftView,
    RoleDialogState,
    WorkflowSnapshot,
)
from screener.services.match_client import MatchRequestClient
from screener.services.role_catalog import RoleCatalogClient
from screener.services.rubric_builder import RubricBuilder
from screener.utils.exceptions import (
    ScreenerBaseException,
    InputError,
    SubmissionInProgressError,
    ValidationError,
)
from screener.utils.logging_config import get_logger

logger = get_logger(__name__)


class WorkflowController:
    """Drives one user's upload → scoring → result flow and the role-creation dialog.

    Two independent state machines are tracked:

    * submission: IDLE → SELECTING → READY → SUBMITTING → SUCCEEDED | FAILED
    * role dialog: CLOSED → OPEN → CREATING → CLOSED | OPEN (with error)

    Remote failures never escape ``submit``, ``confirm_role`` or
    ``load_catalog``; they are recorded on the state instead. Misuse (missing
    selection, a second concurrent submission) raises ``InputError`` before
    any request is sent.
    """

    def __init__(self, catalog_client: RoleCatalogClient, match_client: MatchRequestClient, session_id: str = None):
        self.catalog_client = catalog_client
        self.match_client = match_client
        self.session_id = session_id

        self._resume: Optional[UploadedResume] = None
        self._role: Optional[str] = None
        self._phase = SubmissionPhase.IDLE
        self._result: Optional[MatchResult] = None
        self._error: Optional[ScreenerBaseException] = None

        self._catalog: List[str] = []
        self._catalog_loaded = False
        self._catalog_error: Optional[ScreenerBaseException] = None

        self._dialog_phase = DialogPhase.CLOSED
        self._draft: Optional[RubricBuilder] = None
        self._dialog_error: Optional[ScreenerBaseException] = None
        # Bumped whenever a dialog is discarded so late results can be ignored
        self._dialog_generation = 0

    # -------- Read-only state --------
    @property
    def phase(self) -> SubmissionPhase:
        return self._phase

    @property
    def result(self) -> Optional[MatchResult]:
        return self._result

    @property
    def error(self) -> Optional[ScreenerBaseException]:
        return self._error

    @property
    def resume(self) -> Optional[UploadedResume]:
        return self._resume

    @property
    def role(self) -> Optional[str]:
        return self._role

    @property
    def catalog(self) -> List[str]:
        return list(self._catalog)

    @property
    def catalog_loaded(self) -> bool:
        return self._catalog_loaded

    @property
    def catalog_error(self) -> Optional[ScreenerBaseException]:
        return self._catalog_error

    @property
    def dialog_phase(self) -> DialogPhase:
        return self._dialog_phase

    @property
    def dialog_error(self) -> Optional[ScreenerBaseException]:
        return self._dialog_error

    # -------- Catalog --------
    async def load_catalog(self) -> bool:
        """Fetch the role catalog; on failure keep the previous list and record the error."""
        try:
            roles = await self.catalog_client.list_roles()
        except ScreenerBaseException as e:
            logger.error(f"Error fetching job roles: {e.message}")
            self._catalog_error = e
            return False
        except Exception as e:
            logger.error("Unexpected error fetching job roles", exc_info=True)
            self._catalog_error = ScreenerBaseException(f"Error fetching job roles: {e}", cause=e)
            return False

        self._catalog = roles
        self._catalog_loaded = True
        self._catalog_error = None
        return True

    # -------- Selection --------
    def select_resume(self, resume: Optional[UploadedResume]) -> SubmissionPhase:
        self._resume = resume
        logger.debug(f"Resume selected: {resume.filename if resume else None}")
        return self._update_selection_phase()

    def select_role(self, name: str) -> SubmissionPhase:
        if not self._catalog_loaded:
            raise InputError("Job roles have not been loaded yet", field="job_role")
        if not name:
            raise InputError("Please select a job role", field="job_role")
        if name not in self._catalog:
            raise InputError(f"Unknown job role '{name}'", field="job_role")

        self._role = name
        logger.debug(f"Role selected: {name}")
        return self._update_selection_phase()

    def _update_selection_phase(self) -> SubmissionPhase:
        if self._phase == SubmissionPhase.SUBMITTING:
            # the running request keeps the selection it was started with
            return self._phase

        self._result = None
        self._error = None
        if self._resume is not None and self._role:
            self._phase = SubmissionPhase.READY
        elif self._resume is not None or self._role:
            self._phase = SubmissionPhase.SELECTING
        else:
            self._phase = SubmissionPhase.IDLE
        return self._phase

    # -------- Submission --------
    async def submit(self) -> WorkflowSnapshot:
        if self._phase == SubmissionPhase.SUBMITTING:
            raise SubmissionInProgressError()
        if self._resume is None or not self._role:
            raise InputError(
                "Please select a file and job role",
                field="file" if self._resume is None else "job_role"
            )

        resume, role = self._resume, self._role
        self._phase = SubmissionPhase.SUBMITTING
        self._result = None
        self._error = None

        try:
            result = await self.match_client.submit(resume, role)
        except ScreenerBaseException as e:
            logger.error(f"Error uploading resume {resume.filename}: {e.message}")
            self._phase = SubmissionPhase.FAILED
            self._error = e
        except Exception as e:
            logger.error(f"Unexpected error uploading resume {resume.filename}", exc_info=True)
            self._phase = SubmissionPhase.FAILED
            self._error = ScreenerBaseException(f"Error uploading resume: {e}", cause=e)
        else:
            self._phase = SubmissionPhase.SUCCEEDED
            self._result = result

        return self.snapshot()

    # -------- Role dialog --------
    @property
    def draft(self) -> RubricBuilder:
        """The open dialog's draft; edits are only accepted while the dialog is OPEN."""
        if self._dialog_phase == DialogPhase.CREATING:
            raise SubmissionInProgressError("The role is being created and can no longer be edited")
        if self._draft is None:
            raise InputError("The role dialog is not open", field="draft")
        return self._draft

    def open_role_dialog(self) -> RubricBuilder:
        if self._dialog_phase == DialogPhase.CREATING:
            raise SubmissionInProgressError("A role is already being created")
        if self._dialog_phase == DialogPhase.CLOSED:
            self._draft = RubricBuilder()
            self._dialog_error = None
            self._dialog_phase = DialogPhase.OPEN
        return self._draft

    def cancel_role_dialog(self) -> None:
        if self._dialog_phase == DialogPhase.CREATING:
            logger.info("Role dialog closed while creation is in flight; its outcome will be ignored")
        self._dialog_generation += 1
        self._draft = None
        self._dialog_error = None
        self._dialog_phase = DialogPhase.CLOSED

    async def confirm_role(self) -> WorkflowSnapshot:
        if self._dialog_phase == DialogPhase.CREATING:
            raise SubmissionInProgressError("A role is already being created")
        if self._dialog_phase != DialogPhase.OPEN:
            raise InputError("The role dialog is not open", field="draft")

        rubric = self._draft.to_rubric()
        try:
            rubric.check_submittable()
        except ValidationError as e:
            logger.warning(f"Role draft rejected: {e.message}")
            self._dialog_error = e
            return self.snapshot()

        generation = self._dialog_generation
        self._dialog_phase = DialogPhase.CREATING
        self._dialog_error = None

        try:
            await self.catalog_client.create_role(rubric)
        except ScreenerBaseException as e:
            logger.error(f"Error creating role '{rubric.role}': {e.message}")
            if generation == self._dialog_generation:
                self._dialog_phase = DialogPhase.OPEN
                self._dialog_error = e
            return self.snapshot()
        except Exception as e:
            logger.error(f"Unexpected error creating role '{rubric.role}'", exc_info=True)
            if generation == self._dialog_generation:
                self._dialog_phase = DialogPhase.OPEN
                self._dialog_error = ScreenerBaseException(f"Failed to create role: {e}", cause=e)
            return self.snapshot()

        if generation == self._dialog_generation:
            self._draft = None
            self._dialog_phase = DialogPhase.CLOSED

        # The role now exists server-side, so refresh even if the dialog was discarded
        await self.load_catalog()
        return self.snapshot()

    # -------- Snapshot --------
    def snapshot(self) -> WorkflowSnapshot:
        draft = DraftView.from_builder(self._draft) if self._draft is not None else None
        return WorkflowSnapshot(
            session_id=self.session_id,
            phase=self._phase,
            resume_filename=self._resume.filename if self._resume else None,
            role=self._role,
            result=self._result,
            error=self._error.to_dict() if self._error else None,
            catalog=list(self._catalog),
            catalog_loaded=self._catalog_loaded,
            catalog_error=self._catalog_error.to_dict() if self._catalog_error else None,
            role_dialog=RoleDialogState(
                phase=self._dialog_phase,
                draft=draft,
                error=self._dialog_error.to_dict() if self._dialog_error else None,
            ),
        )
