"""Skill normalization and categorization for the SKILLS block."""

from __future__ import annotations

import re

CATEGORY_ORDER = (
    "Languages",
    "Frameworks/Libraries",
    "Databases",
    "Cloud/DevOps",
    "Tools",
    "Practices",
)

SKILL_CATEGORIES: dict[str, tuple[str, ...]] = {
    "Languages": (
        "java", "python", "javascript", "typescript", "c#", "c++", "html", "css", "sql",
        "dart", "php", "ruby", "go", "rust", "swift", "kotlin", "scala",
    ),
    "Frameworks/Libraries": (
        "spring", "react", "angular", "vue", "node", "express", "django", "flask", "asp.net",
        "laravel", "flutter", "jquery", "bootstrap", "tailwind", "next.js", "nuxt.js",
    ),
    "Databases": (
        "mysql", "postgresql", "mongodb", "sql server", "oracle", "dynamodb", "redis",
        "elasticsearch", "firebase", "cassandra", "neo4j",
    ),
    "Cloud/DevOps": (
        "aws", "azure", "gcp", "docker", "kubernetes", "jenkins", "git", "github", "gitlab",
        "ci/cd", "terraform", "ansible", "nginx", "apache", "helm", "prometheus",
        "github actions",
    ),
    "Tools": (
        "visual studio", "vs code", "intellij", "eclipse", "postman", "jira", "confluence",
        "figma", "sketch", "cursor ai", "chatgpt", "maven", "gradle", "npm", "yarn", "tableau",
    ),
    "Practices": (
        "agile", "scrum", "kanban", "tdd", "bdd", "unit testing", "integration testing",
        "code review", "pair programming", "devops", "system design", "security",
        "automation", "microservices", "api design", "rest apis", "graphql",
        "automated testing",
    ),
}

# Used when a résumé lists nothing for a category.
DEFAULT_SKILLS: dict[str, tuple[str, ...]] = {
    "Languages": (
        "Java", "Python", "JavaScript (ES6+)", "TypeScript", "C++", "HTML5", "CSS3",
        "Kotlin", "Swift",
    ),
    "Frameworks/Libraries": ("Spring Boot", "Node.js", "React", "React Native", "Express", "Laravel"),
    "Databases": ("MySQL", "PostgreSQL", "MongoDB", "Firebase"),
    "Cloud/DevOps": ("AWS", "Docker", "Kubernetes", "Jenkins", "GitHub Actions", "CI/CD"),
    "Tools": ("Git", "Jira", "Visual Studio", "Postman", "Tableau"),
    "Practices": ("Agile/Scrum", "Code Reviews", "TDD", "Unit Testing", "Automated Testing"),
}

STANDARD_NAMES: dict[str, str] = {
    "postgres": "PostgreSQL",
    "postgresql": "PostgreSQL",
    "postgres sql": "PostgreSQL",
    "nodejs": "Node.js",
    "node.js": "Node.js",
    "reactjs": "React.js",
    "react.js": "React.js",
    "angularjs": "Angular.js",
    "angular.js": "Angular.js",
    "vuejs": "Vue.js",
    "vue.js": "Vue.js",
    "expressjs": "Express.js",
    "express.js": "Express.js",
    "spring boot": "Spring Boot",
    "springboot": "Spring Boot",
    "asp.net": "ASP.NET",
    "aspnet": "ASP.NET",
    "rest api": "REST APIs",
    "rest apis": "REST APIs",
    "restapi": "REST APIs",
    "ci/cd": "CI/CD",
    "cicd": "CI/CD",
    "vs code": "VS Code",
    "vscode": "VS Code",
    "visual studio code": "VS Code",
    "nextjs": "Next.js",
    "next.js": "Next.js",
    "nuxtjs": "Nuxt.js",
    "nuxt.js": "Nuxt.js",
    "typescript": "TypeScript",
    "javascript": "JavaScript",
    "html5": "HTML5",
    "css3": "CSS3",
    "aws": "AWS",
    "azure": "Azure",
    "gcp": "GCP",
    "kubernetes": "Kubernetes",
    "docker": "Docker",
    "jenkins": "Jenkins",
    "git": "Git",
    "github": "GitHub",
    "gitlab": "GitLab",
    "terraform": "Terraform",
    "ansible": "Ansible",
    "nginx": "Nginx",
    "apache": "Apache",
    "mysql": "MySQL",
    "mongodb": "MongoDB",
    "redis": "Redis",
    "elasticsearch": "Elasticsearch",
    "firebase": "Firebase",
    "cassandra": "Cassandra",
    "neo4j": "Neo4j",
    "java": "Java",
    "python": "Python",
    "c#": "C#",
    "c++": "C++",
    "sql": "SQL",
    "dart": "Dart",
    "php": "PHP",
    "ruby": "Ruby",
    "go": "Go",
    "rust": "Rust",
    "swift": "Swift",
    "kotlin": "Kotlin",
    "scala": "Scala",
    "agile": "Agile",
    "scrum": "Scrum",
    "kanban": "Kanban",
    "tdd": "TDD",
    "bdd": "BDD",
    "unit testing": "Unit Testing",
    "integration testing": "Integration Testing",
    "code review": "Code Review",
    "pair programming": "Pair Programming",
    "devops": "DevOps",
    "system design": "System Design",
    "security": "Security",
    "automation": "Automation",
    "microservices": "Microservices",
    "api design": "API Design",
    "graphql": "GraphQL",
}

# Lines about work authorization are not skills.
EXCLUDED_MARKERS = ("security clearance", "eligible", "u.s. citizen")

_CATEGORY_PREFIX = re.compile(r"^(languages?|frameworks?|databases?|tools?|practices?):\s*", re.IGNORECASE)
_LEADING_BULLET = re.compile(r"^[•\-*]\s*")


def standardize_skill_name(skill: str) -> str:
    """Map common spellings to a canonical name, else title-case each word.

    Exact matches win over partial ones; partial matching walks
    ``STANDARD_NAMES`` in order, so "postgres 14" becomes "PostgreSQL".
    """
    lowered = skill.lower()
    if lowered in STANDARD_NAMES:
        return STANDARD_NAMES[lowered]
    for variant, standard in STANDARD_NAMES.items():
        if variant in lowered:
            return standard
    return " ".join(word[:1].upper() + word[1:].lower() for word in skill.split(" "))


def extract_skills_from_content(line: str) -> list[str]:
    """Split one comma-separated skills line into standardized names."""
    body = _CATEGORY_PREFIX.sub("", line)
    skills = []
    for raw in body.split(","):
        cleaned = _LEADING_BULLET.sub("", raw.strip())
        cleaned = re.sub(r"\s+", " ", cleaned)
        cleaned = re.sub(r"\.$", "", cleaned)
        skill = standardize_skill_name(cleaned)
        if skill:
            skills.append(skill)
    return skills


def organize_skills_into_categories(lines: list[str]) -> dict[str, list[str]]:
    """Bucket skills into ``CATEGORY_ORDER``; unknown skills go to Languages."""
    buckets: dict[str, list[str]] = {category: [] for category in CATEGORY_ORDER}

    for line in lines:
        if not line.strip():
            continue
        if any(marker in line.lower() for marker in EXCLUDED_MARKERS):
            continue
        for skill in extract_skills_from_content(line):
            normalized = skill.lower().strip()
            category = next(
                (
                    name for name, terms in SKILL_CATEGORIES.items()
                    if any(term in normalized for term in terms)
                ),
                "Languages",
            )
            if skill not in buckets[category]:
                buckets[category].append(skill)

    return buckets


def format_category_line(category: str, skills: list[str]) -> str:
    """``"Tools:<pad>A, B"`` with the list de-duplicated and sorted."""
    padding = " " * max(1, 20 - len(category))
    return f"{category}:{padding}{', '.join(sorted(set(skills)))}"
