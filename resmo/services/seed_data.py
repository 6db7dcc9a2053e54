"""Demo candidates loaded into a fresh store."""

from typing import List

from resmo.schemas.candidate import (
    AuditLogEntry,
    Candidate,
    CandidateAnalysis,
    CandidateStatus,
    SkillCheckDetails,
    TextResume,
    WorkHistoryEntry,
)
from resmo.utils.helpers import utc_now_iso


def _created(details: str = "Candidate added") -> List[AuditLogEntry]:
    return [AuditLogEntry(timestamp=utc_now_iso(), action="Initial Entry", details=details)]


def seed_candidates() -> List[Candidate]:
    """Eight candidates spread across every status."""
    return [
        Candidate(
            id="cand-1",
            name="Candidate 1",
            email="candidate.1@example.com",
            role="Senior React Developer",
            status=CandidateStatus.INTERVIEWING,
            applied_date="2023-10-25",
            resume=TextResume(text="Full resume text for Candidate 1..."),
            anonymized_resume_text="Anonymized resume text for Candidate 1...",
            analysis=CandidateAnalysis(
                summary="Experienced developer with a strong background in React and TypeScript.",
                skills=["React", "TypeScript", "Node.js", "Jest"],
                experience_years=7,
                education=["BSc Computer Science"],
                fit_score=8,
                work_history=[
                    WorkHistoryEntry(
                        company="Tech Solutions Inc.",
                        title="Senior Frontend Developer",
                        start_date="2020-01",
                        end_date="Present",
                        description="Led the development of a new client-facing dashboard using React, "
                        "Redux, and TypeScript, improving user engagement by 25%.",
                        industry="Tech",
                    ),
                    WorkHistoryEntry(
                        company="Web Innovators",
                        title="Frontend Developer",
                        start_date="2017-06",
                        end_date="2019-12",
                        description="Developed and maintained reusable UI components for a large-scale "
                        "e-commerce platform.",
                        industry="Tech",
                    ),
                ],
            ),
            recommended_action="Proceed to final interview",
            action_justification="Excellent technical skills and strong cultural fit demonstrated in the first round.",
            audit_log=_created(),
        ),
        Candidate(
            id="cand-2",
            name="Candidate 2",
            email="candidate.2@example.com",
            role="UX/UI Designer",
            status=CandidateStatus.SHORTLISTED,
            applied_date="2023-10-22",
            resume=TextResume(text="Full resume text for Candidate 2..."),
            anonymized_resume_text="Anonymized resume text for Candidate 2...",
            analysis=CandidateAnalysis(
                summary="Creative designer with a portfolio showcasing modern, user-centric designs.",
                skills=["Figma", "Sketch", "Adobe XD", "User Research"],
                experience_years=5,
                education=["MFA in Design"],
                fit_score=9,
                work_history=[
                    WorkHistoryEntry(
                        company="Digital Canvas",
                        title="Lead UX/UI Designer",
                        start_date="2019-03",
                        end_date="Present",
                        description="Oversaw the design lifecycle for multiple mobile and web applications, "
                        "from user research and wireframing to high-fidelity prototypes and user testing.",
                        industry="Design",
                    ),
                    WorkHistoryEntry(
                        company="Creative Agency",
                        title="UI Designer",
                        start_date="2017-01",
                        end_date="2019-02",
                        description="Created visually appealing interfaces for various client websites "
                        "and marketing materials.",
                        industry="Creative Agency",
                    ),
                ],
            ),
            recommended_action="Shortlist for Interview",
            action_justification="Portfolio aligns perfectly with our brand aesthetics and user experience goals.",
            audit_log=_created(),
        ),
        Candidate(
            id="cand-3",
            name="Candidate 3",
            email="candidate.3@example.com",
            role="Senior React Developer",
            status=CandidateStatus.NEW,
            applied_date="2023-10-28",
            audit_log=_created("Candidate added, awaiting resume."),
        ),
        Candidate(
            id="cand-4",
            name="Candidate 4",
            email="candidate.4@example.com",
            role="Data Scientist",
            status=CandidateStatus.SKILL_CHECK_COMPLETED,
            applied_date="2023-10-26",
            resume=TextResume(
                text="Data Scientist with 4 years of experience specializing in predictive modeling and "
                "machine learning. Proficient in Python, R, and SQL."
            ),
            anonymized_resume_text="Anonymized resume for Data Scientist.",
            analysis=CandidateAnalysis(
                summary="Data scientist with expertise in machine learning and Python.",
                skills=["Python", "TensorFlow", "scikit-learn", "SQL"],
                experience_years=4,
                education=["PhD in Machine Learning"],
                fit_score=9,
                work_history=[
                    WorkHistoryEntry(
                        company="Data Insights Corp",
                        title="Data Scientist",
                        start_date="2020-07",
                        end_date="Present",
                        description="Developed predictive models for customer churn.",
                        industry="Tech",
                    )
                ],
            ),
            skill_check_score=92,
            skill_check_details=SkillCheckDetails(
                summary="Excellent grasp of statistical modeling and data visualization.",
                strengths=["Python (Pandas, NumPy)", "SQL", "Predictive Modeling"],
                areas_for_improvement=["Cloud Deployment (AWS SageMaker)"],
            ),
            recommended_action="Shortlist for Interview",
            action_justification="High skill check score and relevant project experience.",
            audit_log=_created(),
        ),
        Candidate(
            id="cand-5",
            name="Candidate 5",
            email="candidate.5@example.com",
            role="Product Manager",
            status=CandidateStatus.REJECTED,
            applied_date="2023-10-21",
            resume=TextResume(
                text="Product Manager with a background in B2B SaaS products. Experienced in agile "
                "methodologies and market analysis."
            ),
            anonymized_resume_text="Anonymized resume for Product Manager.",
            analysis=CandidateAnalysis(
                summary="Product manager with a background in marketing.",
                skills=["Agile", "Roadmapping", "Market Research"],
                experience_years=6,
                education=["MBA"],
                fit_score=4,
                work_history=[
                    WorkHistoryEntry(
                        company="MarketPro",
                        title="Product Manager",
                        start_date="2018-02",
                        end_date="Present",
                        description="Managed a suite of marketing analytics products.",
                        industry="Finance",
                    )
                ],
            ),
            recommended_action="Reject",
            action_justification="Experience is not aligned with our technical product needs.",
            audit_log=_created(),
        ),
        Candidate(
            id="cand-6",
            name="Candidate 6",
            email="candidate.6@example.com",
            role="Full Stack Developer",
            status=CandidateStatus.SKILL_CHECK_PENDING,
            applied_date="2023-10-29",
            resume=TextResume(
                text="Versatile Full Stack Developer with 5 years of experience in building and maintaining "
                "web applications using Node.js and Vue.js."
            ),
            anonymized_resume_text="Anonymized resume for Full Stack Developer.",
            analysis=CandidateAnalysis(
                summary="Versatile full stack developer with experience in Node.js and Vue.js.",
                skills=["Node.js", "Vue.js", "MongoDB", "Docker"],
                experience_years=5,
                education=["BSc in Software Engineering"],
                fit_score=7,
                work_history=[
                    WorkHistoryEntry(
                        company="AppCrafters",
                        title="Full Stack Developer",
                        start_date="2019-01",
                        end_date="Present",
                        description="Built and maintained microservices for a SaaS application.",
                        industry="Tech",
                    )
                ],
            ),
            recommended_action="Request Skill Check",
            action_justification="Solid background, skill check needed to verify proficiency.",
            audit_log=_created(),
        ),
        Candidate(
            id="cand-7",
            name="Candidate 7",
            email="candidate.7@example.com",
            role="DevOps Engineer",
            status=CandidateStatus.NEW,
            applied_date="2023-10-30",
            resume=TextResume(
                text="Experienced DevOps engineer with a focus on CI/CD pipelines and cloud infrastructure "
                "management. Proficient in AWS, Kubernetes, and Terraform."
            ),
            audit_log=_created(),
        ),
        Candidate(
            id="cand-8",
            name="Candidate 8",
            email="candidate.8@example.com",
            role="Junior Frontend Developer",
            status=CandidateStatus.HIRED,
            applied_date="2023-10-15",
            resume=TextResume(
                text="Enthusiastic junior developer with a passion for creating beautiful and responsive "
                "user interfaces. Skilled in React and modern CSS."
            ),
            anonymized_resume_text="Anonymized resume for Junior Frontend Developer.",
            analysis=CandidateAnalysis(
                summary="Enthusiastic junior developer with a great portfolio of personal projects.",
                skills=["HTML", "CSS", "JavaScript", "React"],
                experience_years=1,
                education=["Coding Bootcamp Certificate"],
                fit_score=8,
                work_history=[
                    WorkHistoryEntry(
                        company="Internship at Web Widgets",
                        title="Frontend Intern",
                        start_date="2023-06",
                        end_date="2023-09",
                        description="Assisted in building UI components and fixing bugs.",
                        industry="Tech",
                    )
                ],
            ),
            recommended_action="Hire",
            action_justification="Strong potential, positive interviews, and a great cultural fit.",
            audit_log=_created(),
        ),
    ]
