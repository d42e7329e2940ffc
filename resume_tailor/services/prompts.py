from __future__ import annotations

JSON_ONLY = "Always respond with valid JSON only, no markdown or code blocks."

MATCH_ANALYSIS_SYSTEM = f"You are an expert resume reviewer. {JSON_ONLY}"
ATS_KEYWORDS_SYSTEM = f"You are an ATS optimization expert. {JSON_ONLY}"
MISSING_QUALIFICATIONS_SYSTEM = f"You are a career advisor. {JSON_ONLY}"
FIX_ISSUE_SYSTEM = f"You are an expert resume advisor. {JSON_ONLY}"

_MATCH_ANALYSIS_TEMPLATE = """You are an expert resume reviewer and career advisor. Compare the following resume against the job posting and provide a comprehensive analysis in JSON format.

Job Posting:
{job_posting}

Resume:
{resume}

Analyze how well the resume matches the job requirements and provide specific, actionable feedback. Provide a JSON response with the following structure:
{{
  "score": <number between 0-100>,
  "overall": <number matching score>,
  "topFixes": [
    {{
      "title": "<issue title>",
      "count": <number of instances>,
      "description": "<brief description>",
      "premium": false
    }}
  ],
  "completed": [
    {{
      "title": "<strength title>",
      "score": <number>
    }}
  ],
  "issues": [
    {{
      "title": "<issue title>",
      "description": "<detailed description>",
      "fixButton": "<button label>",
      "category": "<category>"
    }}
  ],
  "feedback": "<overall feedback paragraph>",
  "tips": "<additional tips>"
}}

Focus on comparing the resume to the job posting:
- How well skills match the job requirements
- Missing keywords from the job posting
- Experience alignment with job requirements
- Quantifying impact (add numbers/metrics relevant to the job)
- Tailoring bullet points to match job responsibilities
- Missing qualifications or certifications mentioned in the job
- ATS keyword optimization for this specific job
- Formatting and structure issues

Score the resume based on how well it matches THIS SPECIFIC JOB:
- Job-relevant content and skills match (40%)
- Keyword alignment with job posting (25%)
- Experience relevance to job requirements (20%)
- Quantified achievements relevant to the role (15%)

Return ONLY valid JSON, no markdown formatting."""

_ATS_KEYWORDS_TEMPLATE = """Analyze the resume and job posting below. Identify all ATS keywords from the job posting that are missing from the resume.

Job Posting:
{job_posting}

Resume:
{resume}

Return a JSON response with this structure:
{{
  "keywords": ["keyword1", "keyword2", "keyword3"],
  "suggestions": "Detailed suggestions on where and how to add these keywords naturally to the resume."
}}

Focus on:
- Technical skills mentioned in the job
- Software/tools mentioned
- Certifications required
- Industry-specific terms
- Action verbs that match the job description

Return ONLY valid JSON, no markdown formatting."""

_MISSING_QUALIFICATIONS_TEMPLATE = """Analyze the resume and job posting below. Identify all qualifications, certifications, skills, or requirements mentioned in the job posting that are missing from the resume.

Job Posting:
{job_posting}

Resume:
{resume}

Return a JSON response with this structure:
{{
  "qualifications": ["qualification1", "qualification2", "qualification3"],
  "suggestions": "Detailed suggestions on how to address these missing qualifications, including whether they can be added, if they're critical, and alternative ways to demonstrate similar capabilities."
}}

Focus on:
- Required certifications
- Required education level
- Required years of experience
- Required technical skills
- Required soft skills
- Industry-specific requirements

Return ONLY valid JSON, no markdown formatting."""

_FIX_ISSUE_TEMPLATE = """You are an expert resume advisor. Provide detailed, actionable fix suggestions for this specific resume issue.

Issue: {issue_title}
Description: {issue_description}

Job Posting:
{job_posting}

Resume:
{resume}

Provide a JSON response with this structure:
{{
  "specificExamples": ["example 1", "example 2", "example 3"],
  "beforeAfterExamples": [
    {{
      "before": "weak bullet point",
      "after": "improved bullet point with metrics"
    }}
  ],
  "stepByStepGuide": [
    "Step 1: ...",
    "Step 2: ...",
    "Step 3: ..."
  ],
  "keywordsToAdd": ["keyword1", "keyword2"],
  "tips": "Additional helpful tips and best practices"
}}

Focus on:
- Specific, actionable suggestions
- Real examples from the resume if possible
- Before/after examples showing improvements
- Step-by-step instructions
- Keywords or phrases to add
- Best practices for this specific issue type

Return ONLY valid JSON, no markdown formatting."""


def match_analysis_prompt(resume: str, job_posting: str) -> str:
    return _MATCH_ANALYSIS_TEMPLATE.format(resume=resume, job_posting=job_posting)


def ats_keywords_prompt(resume: str, job_posting: str) -> str:
    return _ATS_KEYWORDS_TEMPLATE.format(resume=resume, job_posting=job_posting)


def missing_qualifications_prompt(resume: str, job_posting: str) -> str:
    return _MISSING_QUALIFICATIONS_TEMPLATE.format(resume=resume, job_posting=job_posting)


def fix_issue_prompt(issue_title: str, issue_description: str | None, resume: str, job_posting: str) -> str:
    return _FIX_ISSUE_TEMPLATE.format(
        issue_title=issue_title,
        issue_description=issue_description or "Not provided",
        resume=resume,
        job_posting=job_posting,
    )
