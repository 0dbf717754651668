from app.agents.prompt_flow import PromptFlow
from app.schemas.ResumeSchemas import EnhanceResumeInput, ResumeBuilderFields, ResumeContent
from app.schemas.FlowSchemas import (
    AnalyzeUploadedResumeOutput,
    InterviewQuestionsInput,
    InterviewQuestionsOutput,
    ResumeDocumentInput,
    StyleEditInput,
    StyleEditOutput,
)

PREVIEW_CONTAINER_CLASS = "resume-preview"

# --- Prompt templates ---

ENHANCE_RESUME_PROMPT = """You are an expert resume writer. You will be provided with information about a user.

Based on this information, enhance each section of the resume by improving phrasing, adding relevant keywords, and ensuring it is professional.

User Information:
About Me: {{ aboutMe }}
Personal Info: {{ personalInfo }}
Education: {{ education }}
Technical Skills: {{ skills }}
Soft Skills: {{ softSkills }}
Projects: {{ projects }}
Achievements: {{ achievements }}
{% if githubLink %}GitHub: {{ githubLink }}
{% endif %}{% if linkedinProfile %}LinkedIn: {{ linkedinProfile }}
{% endif %}{% if exampleResume %}Example Resume (use only as layout inspiration): {{ media(exampleResume) }}
{% endif %}
Output rules:
- personalInfo must be an object: "name" is the full name, "addressLines" the postal address one line per entry,
  and "contact" holds email, phone, website, github and linkedin when known.
- For every other key return the enhanced text for that section. For example, for 'skills' return the enhanced list of skills.
- If a section was left empty, return an empty string for it instead of inventing content.
"""

EXTRACT_RESUME_PROMPT = """You are an expert resume parser. Read the attached resume document and extract its content section by section.

Resume: {{ media(resumeDataUri) }}

Return the raw content (do not rewrite it) in these fields:
- personalInfo: name on the first line, then address, email and phone, one per line
- aboutMe, education, skills (technical), softSkills, projects, achievements
- githubLink and linkedinProfile when the resume lists them
Use an empty string for any section the resume does not contain.
"""

ANALYZE_RESUME_PROMPT = """You are a resume expert. Analyze the uploaded resume and provide detailed feedback.

Resume: {{ media(resumeDataUri) }}

Provide feedback in the following areas:
- Formatting: Analyze the formatting of the resume and provide suggestions for improvement.
- Grammar: Check the grammar and spelling of the resume and provide corrections.
- Missing Skills: Identify any missing skills that should be added to the resume based on industry standards.
- ATS Compatibility: Check the resume for Applicant Tracking System (ATS) compatibility issues and rate it with an atsScore from 0 to 10.

Focus on actionable advice the candidate can apply immediately.
"""

INTERVIEW_QUESTIONS_PROMPT = """You are an assistant that generates interview questions for a given job role.

Based on the job role: {{ jobRole }} and the time left until the interview: {{ timeLeft }}, generate a list of relevant interview questions, including both technical and HR-related questions.
Provide a diverse set of questions to help the user prepare comprehensively.
The questions should be challenging and insightful, aimed at assessing the candidate's skills, experience, and cultural fit.
Make sure the questions are tailored to the job role and the time the user has to prepare.

Example questions:
- "Tell me about a time you faced a challenging situation at work and how you resolved it."
- "Describe your experience with [relevant technology/skill]."
- "Why are you interested in this role?"
"""

EDIT_STYLE_PROMPT = """You are a CSS expert. A user wants to style their resume. You will be given the current resume content and a natural language instruction.

Your task is to generate a snippet of CSS code that will apply the requested styling to the resume's HTML structure.

The resume has the following structure:
- The main container has the class `""" + PREVIEW_CONTAINER_CLASS + """`.
- Section titles are `h3` elements.
- Body content inside sections are `div` elements with the class `text-xs`.
- The header containing personal info has a `header` tag. The name is an `h1`, and contact info is in a `div` with class `text-xs`.

Instruction: "{{ instruction }}"

Current Resume Content (for context):
{{ currentResume | tojson(indent=2) }}

Generate only the CSS code required to fulfill the user's instruction. Do not include the HTML or any other explanations.
The CSS must be scoped to the '.""" + PREVIEW_CONTAINER_CLASS + """' class to avoid affecting other parts of the application. For example: `.""" + PREVIEW_CONTAINER_CLASS + """ h3 { color: blue; }`
"""

# --- Bound flows ---

enhance_resume_flow = PromptFlow(
    name="enhance_resume_prompt",
    input_schema=EnhanceResumeInput,
    output_schema=ResumeContent,
    template=ENHANCE_RESUME_PROMPT,
)

extract_resume_flow = PromptFlow(
    name="extract_resume_prompt",
    input_schema=ResumeDocumentInput,
    output_schema=ResumeBuilderFields,
    template=EXTRACT_RESUME_PROMPT,
)

analyze_resume_flow = PromptFlow(
    name="analyze_uploaded_resume_prompt",
    input_schema=ResumeDocumentInput,
    output_schema=AnalyzeUploadedResumeOutput,
    template=ANALYZE_RESUME_PROMPT,
)

interview_questions_flow = PromptFlow(
    name="generate_interview_questions_prompt",
    input_schema=InterviewQuestionsInput,
    output_schema=InterviewQuestionsOutput,
    template=INTERVIEW_QUESTIONS_PROMPT,
)

edit_style_flow = PromptFlow(
    name="edit_resume_style_prompt",
    input_schema=StyleEditInput,
    output_schema=StyleEditOutput,
    template=EDIT_STYLE_PROMPT,
)
