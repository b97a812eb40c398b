"""Templates defined in Python, with content built from the answers."""

from __future__ import annotations

import json
from collections.abc import Callable

from cliforge.prompts.base import AnswerSet
from cliforge.templates.base import FileSpec, ManifestDependencies, TemplateDefinition


def _readme(answers: AnswerSet) -> str:
    name = answers.get("project_name", "my-project")
    description = answers.get("description") or "A new project."
    return (
        f"# {name}\n\n{description}\n\n"
        "## Development\n\n```\nnpm install\nnpm run dev\n```\n"
    )


def _api_index(answers: AnswerSet) -> str:
    name = answers.get("project_name", "my-project")
    return f"""import express from 'express';
import cors from 'cors';

const app = express();
const PORT = process.env.PORT || 3000;

app.use(cors());
app.use(express.json());

app.get('/', (req, res) => {{
  res.json({{ message: 'Welcome to {name} API!' }});
}});

app.get('/api/health', (req, res) => {{
  res.json({{ status: 'OK', timestamp: new Date().toISOString() }});
}});

app.listen(PORT, () => {{
  console.log(`Server running on http://localhost:${{PORT}}`);
}});
"""


_API_TSCONFIG = json.dumps(
    {
        "compilerOptions": {
            "target": "ES2022",
            "module": "ESNext",
            "moduleResolution": "Node",
            "outDir": "./dist",
            "rootDir": "./src",
            "strict": True,
            "esModuleInterop": True,
            "skipLibCheck": True,
        },
        "include": ["src/**/*"],
        "exclude": ["node_modules", "dist"],
    },
    indent=2,
)


def _has_feature(feature: str) -> Callable[[AnswerSet], bool]:
    def _check(answers: AnswerSet) -> bool:
        return feature in (answers.get("features") or [])

    return _check


EXPRESS_API = TemplateDefinition(
    name="express-api",
    description="Express.js API with TypeScript",
    files=(
        FileSpec("README.md", _readme),
        FileSpec("src/index.ts", _api_index),
        FileSpec("tsconfig.json", _API_TSCONFIG),
        FileSpec(
            ".eslintrc.json",
            '{\n  "extends": ["eslint:recommended"]\n}\n',
            _has_feature("eslint"),
        ),
        FileSpec(
            ".prettierrc",
            '{\n  "singleQuote": true\n}\n',
            _has_feature("prettier"),
        ),
    ),
    dependencies=ManifestDependencies(
        runtime={"express": "^4.18.0", "cors": "^2.8.5"},
        dev={
            "@types/express": "^4.17.0",
            "@types/cors": "^2.8.0",
            "@types/node": "^20.0.0",
            "typescript": "^5.0.0",
            "tsx": "^4.0.0",
        },
    ),
    scripts={
        "dev": "tsx src/index.ts",
        "build": "tsc",
        "start": "node dist/index.js",
    },
)

BUILTIN_TEMPLATES: tuple[TemplateDefinition, ...] = (EXPRESS_API,)
