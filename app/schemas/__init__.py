from .ResumeSchemas import (
	ContactInfo,
	PersonalInfo,
	ResumeContent,
	ResumeBuilderFields,
	EnhanceResumeInput,
	ResumeRecord,
	ResumeContentUpdate,
	ResumeSummary,
	ResumeSingleResponse,
	ResumeListResponse,
	ResumeCreated,
	ResumeCreatedResponse,
)
from .FlowSchemas import (
	ResumeDocumentInput,
	AnalysisFeedback,
	AnalyzeUploadedResumeOutput,
	InterviewQuestionsInput,
	InterviewQuestionsOutput,
	StyleEditInput,
	StyleEditOutput,
	StyleInstructionRequest,
	AnalysisResponse,
	InterviewQuestionsResponse,
)

__all__ = [
	"ContactInfo",
	"PersonalInfo",
	"ResumeContent",
	"ResumeBuilderFields",
	"EnhanceResumeInput",
	"ResumeRecord",
	"ResumeContentUpdate",
	"ResumeSummary",
	"ResumeSingleResponse",
	"ResumeListResponse",
	"ResumeCreated",
	"ResumeCreatedResponse",
	"ResumeDocumentInput",
	"AnalysisFeedback",
	"AnalyzeUploadedResumeOutput",
	"InterviewQuestionsInput",
	"InterviewQuestionsOutput",
	"StyleEditInput",
	"StyleEditOutput",
	"StyleInstructionRequest",
	"AnalysisResponse",
	"InterviewQuestionsResponse",
]
