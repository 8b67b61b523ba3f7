"""Seed script: writes sample CVs into the CV directory and prints an admin token.

Run via: python scripts/seed_data.py
"""

from jose import jwt

from candidate_matcher.core.config import settings

VACANCY = (
    "Senior Data Engineer: 5+ years building data pipelines in Python, strong SQL, "
    "Snowflake or BigQuery, Airflow, Spark, AWS and Terraform"
)

CVS = {
    "Maria_Kowalski.txt": """Maria Kowalski
Data Engineer | maria.kowalski@example.com

EXPERIENCE

Senior Data Engineer -- Zalando (2019-2024)
- Owned 40+ Airflow DAGs loading clickstream data into Snowflake
- Rewrote nightly Spark jobs in PySpark, cutting runtime from 6h to 50 minutes
- Managed AWS infrastructure (S3, EMR, IAM) with Terraform

Data Analyst -- Allegro (2016-2019)
- Wrote SQL reports and dbt models for the finance team

SKILLS
Python, SQL, Airflow, Spark, Snowflake, dbt, AWS, Terraform""",
    "Tom_Okafor.txt": """Tom Okafor
Backend Developer | tom.okafor@example.com

EXPERIENCE

Backend Developer -- Fintech startup (2020-2024)
- Built REST services in Python and Go
- PostgreSQL schema design and query tuning
- Some ETL scripts scheduled with cron

SKILLS
Python, Go, PostgreSQL, Docker, SQL""",
    "Lena_Fischer.txt": """Lena Fischer
Frontend Engineer | lena.fischer@example.com

EXPERIENCE

Frontend Engineer -- Agency (2018-2024)
- React and TypeScript single page applications
- Design systems with Storybook

SKILLS
JavaScript, TypeScript, React, CSS""",
}


def seed() -> None:
    resumes_dir = settings.resumes_dir
    resumes_dir.mkdir(parents=True, exist_ok=True)

    for filename, text in CVS.items():
        path = resumes_dir / filename
        if path.exists():
            print(f"{path} already exists. Skipping.")
            continue
        path.write_text(text, encoding="utf-8")
        print(f"Wrote {path}")

    token = jwt.encode(
        {"sub": "demo-admin", "role": "admin"},
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )

    print("=" * 60)
    print("Sample CVs written to", resumes_dir.resolve())
    print("=" * 60)
    print()
    print(f"Admin JWT:  {token}")
    print()
    print("Test with:")
    print(f'  export TOKEN="{token}"')
    print()
    print("  # Match candidates")
    print('  curl -s -X POST -H "Content-Type: application/json" \\')
    print(f"    -d '{{\"vacancyDescription\": \"{VACANCY}\"}}' \\")
    print("    http://localhost:8000/api/candidate-matcher/match | python -m json.tool")
    print()
    print("  # List prompt templates")
    print('  curl -s -H "Authorization: Bearer $TOKEN" http://localhost:8000/api/admin/prompts | python -m json.tool')
    print()
    print("  # Cost so far")
    print("  curl -s http://localhost:8000/api/cost/metrics | python -m json.tool")


if __name__ == "__main__":
    seed()
