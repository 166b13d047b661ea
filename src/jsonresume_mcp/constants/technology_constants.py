"""
Constants for technology detection in project directories.
"""

# Directories to skip when walking a tree without git (case-insensitive)
SKIP_DIRS = {
    # Dependencies
    "node_modules",
    "vendor",
    "bower_components",
    # Python environments
    "venv",
    ".venv",
    "env",
    "virtualenv",
    "__pycache__",
    ".pytest_cache",
    ".mypy_cache",
    ".ruff_cache",
    ".tox",
    ".nox",
    # Version control
    ".git",
    ".svn",
    ".hg",
    # Build outputs
    "build",
    "dist",
    "target",
    ".next",
    ".nuxt",
    ".gradle",
}

# package.json dependency name -> technology
PACKAGE_JSON_MARKERS: dict[str, str] = {
    "react": "React",
    "vue": "Vue.js",
    "angular": "Angular",
    "@angular/core": "Angular",
    "express": "Express.js",
    "next": "Next.js",
    "gatsby": "Gatsby",
    "electron": "Electron",
    "typescript": "TypeScript",
    "webpack": "Webpack",
    "jest": "Testing",
    "mocha": "Testing",
    "jasmine": "Testing",
    "tailwindcss": "Tailwind CSS",
    "bootstrap": "Bootstrap",
    "eslint": "ESLint",
    "prettier": "Prettier",
    "prisma": "Prisma",
    "@prisma/client": "Prisma",
    "sequelize": "Sequelize",
    "mongoose": "MongoDB",
    "redis": "Redis",
    "graphql": "GraphQL",
    "apollo": "Apollo",
    "@supabase/supabase-js": "Supabase",
}

# Python distribution name -> technology
PYTHON_DEPENDENCY_MARKERS: dict[str, str] = {
    "fastapi": "FastAPI",
    "django": "Django",
    "flask": "Flask",
    "streamlit": "Streamlit",
    "sqlalchemy": "SQLAlchemy",
    "pydantic": "Pydantic",
    "pytest": "Testing",
    "pandas": "pandas",
    "numpy": "NumPy",
    "torch": "PyTorch",
    "tensorflow": "TensorFlow",
}

# Top-level file or directory name -> technology
ROOT_ENTRY_MARKERS: dict[str, str] = {
    "go.mod": "Go",
    "Cargo.toml": "Rust",
    "requirements.txt": "Python",
    "setup.py": "Python",
    "pyproject.toml": "Python",
    "composer.json": "PHP",
    "Gemfile": "Ruby",
    "pom.xml": "Java",
    "build.gradle": "Java",
    "Dockerfile": "Docker",
    ".github": "GitHub Actions",
    ".gitlab-ci.yml": "GitLab CI",
    "serverless.yml": "Serverless Framework",
    "terraform": "Terraform",
    "prisma": "Prisma",
}

README_NAMES = ("readme.md", "readme.markdown")

RECENT_COMMIT_LIMIT = 20
