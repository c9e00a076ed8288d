"""Built-in sample job description and résumé for trying the app without files."""

from skillgap_radar.models.resume import TEXT_MIME_TYPE, ResumePayload

SAMPLE_RESUME_FILENAME = "sample_resume.txt"

SAMPLE_JD = """Senior Frontend Engineer

Requirements:
- 5+ years of experience with React and TypeScript.
- Deep understanding of modern frontend build tools (Vite, Webpack).
- Experience designing scalable component libraries.
- Proficiency in state management (Redux, Zustand, or Context).
- Knowledge of cloud platforms (AWS/GCP) and CI/CD pipelines.
- Experience with unit and integration testing (Jest, Cypress).
- Strong communication skills and ability to mentor juniors."""

SAMPLE_RESUME = """ALEX RIVERA
Frontend Developer

Summary:
Motivated developer with 3 years of experience building web applications. Passionate about UI/UX and clean code.

Experience:
Web Developer | TechStart Inc. (2021-Present)
- Built internal dashboards using React and JavaScript.
- Managed global state using Redux Toolkit.
- Collaborated with backend team to integrate REST APIs.
- Improved site performance by optimizing images and lazy loading components.

Skills:
- JavaScript (ES6+), React, HTML5, CSS3, Tailwind CSS
- Git, npm, Basic Webpack
- Agile/Scrum methodologies

Education:
B.S. Computer Science, State University"""


def sample_payload() -> ResumePayload:
    return ResumePayload(content=SAMPLE_RESUME, mime_type=TEXT_MIME_TYPE, is_base64=False)
