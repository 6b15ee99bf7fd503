# sitewright/generation/scaffolder.py
"""
Vue/Vite project skeleton for the framework project kind.

The skeleton is synthesized, not parsed from model text. It is small but
buildable with `npm install && npm run build`.
"""
import json
from pathlib import Path
from typing import Dict, List, Optional, Union

from sitewright.constants import HTML_FILE, MANIFEST_FILE, README_FILE
from sitewright.generation.models import AppId, OutputDirectory, OutputKind
from sitewright.generation.writer import resolve_output_directory, write_text
from sitewright.utils.logging import get_logger

logger = get_logger(__name__)

VUE_VERSION = "^3.3.0"
VITE_VERSION = "^4.0.0"
VITE_PLUGIN_VUE_VERSION = "^4.0.0"

VITE_CONFIG = """import { defineConfig } from 'vite'
import vue from '@vitejs/plugin-vue'

export default defineConfig({
  base: './',
  plugins: [vue()],
  server: {
    port: 3000,
    open: true
  }
})
"""

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{title}</title>
</head>
<body>
  <div id="app"></div>
  <script type="module" src="/src/main.js"></script>
</body>
</html>
"""

MAIN_JS = """import { createApp } from 'vue'
import App from './App.vue'

createApp(App).mount('#app')
"""

APP_VUE = """<template>
  <div id="app">
    <h1>{title}</h1>
    <p>This Vue project was generated automatically.</p>
  </div>
</template>

<script>
export default {
  name: 'App'
}
</script>

<style>
#app {
  font-family: Avenir, Helvetica, Arial, sans-serif;
  text-align: center;
  color: #2c3e50;
  margin-top: 60px;
}
</style>
"""


def build_manifest(app_id: AppId) -> Dict:
    """package.json contents with the dev/build/preview script triad."""
    return {
        "name": f"vue-project-{app_id}",
        "version": "1.0.0",
        "private": True,
        "type": "module",
        "scripts": {
            "dev": "vite",
            "build": "vite build",
            "preview": "vite preview",
        },
        "dependencies": {
            "vue": VUE_VERSION,
        },
        "devDependencies": {
            "@vitejs/plugin-vue": VITE_PLUGIN_VUE_VERSION,
            "vite": VITE_VERSION,
        },
    }


def skeleton_files(app_id: AppId) -> Dict[str, str]:
    """Relative path -> content for every skeleton file."""
    title = f"Vue Project {app_id}"
    return {
        MANIFEST_FILE: json.dumps(build_manifest(app_id), indent=2) + "\n",
        "vite.config.js": VITE_CONFIG,
        HTML_FILE: INDEX_HTML.replace("{title}", title),
        "src/main.js": MAIN_JS,
        "src/App.vue": APP_VUE.replace("{title}", title),
    }


class ProjectScaffolder:
    """
    Writes the framework project skeleton into its output directory.

    Re-scaffolding overwrites skeleton files in place and leaves everything
    else (build output, installed dependencies) alone.
    """

    def __init__(self, root: Optional[Union[str, Path]] = None):
        self.root = root

    def scaffold(self, app_id: AppId, accompanying_text: Optional[str] = None) -> OutputDirectory:
        """
        Create or refresh the skeleton for `app_id`.

        Args:
            app_id: Application identifier
            accompanying_text: Optional text saved as README.md

        Returns:
            The output directory handle
        """
        directory = resolve_output_directory(OutputKind.FRAMEWORK_PROJECT, app_id, self.root)

        written: List[str] = []
        for relative_path, content in skeleton_files(app_id).items():
            write_text(directory.path, relative_path, content)
            written.append(relative_path)

        if self.write_notes(directory, accompanying_text):
            written.append(README_FILE)

        logger.info(
            f"Scaffolded Vue project at {directory.absolute_path()}",
            extra={"app_id": str(app_id), "files": written},
        )
        return directory

    def write_notes(self, directory: OutputDirectory, text: Optional[str]) -> bool:
        """Write `text` as README.md. Returns False (and writes nothing) for blank text."""
        return write_text(directory.path, README_FILE, text or "") is not None
