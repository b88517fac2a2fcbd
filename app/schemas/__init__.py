from .user import User
from .application import (
    Application, ApplicationCreate, ApplicationUpdate, ApplicationDetail, ApplicationList,
    Analytics, RaiseIssueRequest, StudentSummary,
)
from .document import Document, DocumentVerifyRequest, FileMeta, UploadResult
from .payment import Payment, PaymentCreate, PaymentInitiated, PaymentVerifyRequest, GatewayHandoff
from .catalog import Program, RequiredDocument, RequiredDocumentConfig, University
from .support import Ticket, TicketCreate, TicketUpdate
from .settings import LLMSettings, LLMSettingsUpdate
from .verification import ApplicantContext, VerificationResult
