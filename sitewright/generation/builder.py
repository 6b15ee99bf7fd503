# sitewright/generation/builder.py
"""
Dependency install and build for framework projects.

The builder is best effort. Every path through :meth:`ProjectBuilder.build`
returns a :class:`BuildOutcome`; install and build failures, timeouts and
missing tooling are recorded in the outcome instead of being raised.
"""
import asyncio
import os
import shutil
import signal
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from sitewright.config import BuildConfig, get_config
from sitewright.generation.models import BuildOutcome, BuildState, BuildStep, OutputDirectory
from sitewright.utils.logging import get_logger

logger = get_logger(__name__)

_POSIX = os.name == "posix"


def _kill_process_tree(process: asyncio.subprocess.Process) -> None:
    """Kill a step and everything it spawned (npm runs the build through sh and node)."""
    try:
        if _POSIX:
            # Each step leads its own session, so its pid is the process group id
            os.killpg(process.pid, signal.SIGKILL)
        else:
            process.kill()
    except ProcessLookupError:
        pass


async def run_step(
    name: str,
    command: List[str],
    cwd: Union[str, Path],
    timeout: float,
) -> BuildStep:
    """
    Run one subprocess to completion or until `timeout` expires.

    A timed out process is killed and reaped before returning.
    """
    step = BuildStep(name=name, command=list(command))
    started = time.monotonic()

    try:
        process = await asyncio.create_subprocess_exec(
            *command,
            cwd=str(cwd),
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            start_new_session=_POSIX,
        )
    except OSError as e:
        # Missing executable or unusable cwd
        step.stderr = f"Failed to start {command[0]}: {e}"
        step.duration = time.monotonic() - started
        logger.error(f"[{name}] {step.stderr}")
        return step

    try:
        stdout_bytes, stderr_bytes = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError:
        _kill_process_tree(process)
        await process.wait()
        step.timed_out = True
        step.duration = time.monotonic() - started
        logger.error(f"[{name}] '{' '.join(command)}' timed out after {timeout}s and was killed")
        return step

    step.returncode = process.returncode
    step.stdout = stdout_bytes.decode("utf-8", errors="replace")
    step.stderr = stderr_bytes.decode("utf-8", errors="replace")
    step.duration = time.monotonic() - started

    if step.returncode != 0:
        logger.error(f"[{name}] exited with code {step.returncode}")
    elif step.stderr.strip():
        # stderr alone is not a failure signal
        logger.warning(f"[{name}] completed with warnings: {step.stderr.strip()[:500]}")
    else:
        logger.debug(f"[{name}] completed in {step.duration:.1f}s")

    return step


class ProjectBuilder:
    """
    Installs dependencies and builds a framework project directory.

    State machine: NOT_ATTEMPTED -> INSTALLING -> BUILDING -> SUCCEEDED | FAILED.
    """

    def __init__(self, config: Optional[BuildConfig] = None):
        self._config = config

    @property
    def config(self) -> BuildConfig:
        return self._config if self._config is not None else get_config().build

    async def build(self, directory: Union[OutputDirectory, str, Path]) -> BuildOutcome:
        """
        Build the project in `directory`.

        Args:
            directory: Output directory handle or a path

        Returns:
            BuildOutcome; `attempted` is False when there is no manifest
        """
        config = self.config
        project_path = directory.path if isinstance(directory, OutputDirectory) else Path(directory)

        if not (project_path / config.manifest_file).is_file():
            logger.warning(f"{config.manifest_file} not found, skipping build: {project_path}")
            return BuildOutcome.skipped("no manifest")

        outcome = BuildOutcome(attempted=True)
        logger.info(f"Building project at {project_path}")

        if not (project_path / config.dependency_dir).exists():
            outcome.state = BuildState.INSTALLING
            logger.info("Installing project dependencies...")
            install = await run_step("install", config.install_command, project_path, config.install_timeout)
            outcome.steps.append(install)
            if not install.succeeded:
                # A cached environment may still satisfy the build
                logger.warning("Dependency install failed, attempting build anyway")
        else:
            logger.debug(f"{config.dependency_dir} present, skipping install")

        outcome.state = BuildState.BUILDING
        logger.info("Building project...")
        build = await run_step("build", config.build_command, project_path, config.build_timeout)
        outcome.steps.append(build)

        outcome.succeeded = build.succeeded
        outcome.state = BuildState.SUCCEEDED if build.succeeded else BuildState.FAILED
        outcome.log = "\n\n".join(step.render() for step in outcome.steps)

        artifact_path = project_path / config.artifact_dir
        if artifact_path.is_dir():
            outcome.artifact_dir = str(artifact_path.resolve())

        if outcome.succeeded:
            logger.info(f"Project build completed: {project_path}")
        else:
            logger.error(f"Project build failed: {project_path}. Source files remain available.")

        return outcome

    async def check_build_environment(self) -> Dict[str, Any]:
        """
        Report the node and npm versions available on PATH.

        Returns:
            Dict with `available` plus a version (or None) per tool
        """
        report: Dict[str, Any] = {"available": True}
        for tool in ("node", "npm"):
            step = await run_step(f"{tool}-version", [tool, "--version"], Path.cwd(), timeout=15)
            version = step.stdout.strip() if step.succeeded else None
            report[tool] = version
            if version is None:
                report["available"] = False
                logger.error(f"Build environment check failed for {tool}: {step.stderr.strip()}")
            else:
                logger.info(f"{tool} version: {version}")
        return report

    def clean_build_cache(self, directory: Union[OutputDirectory, str, Path]) -> List[str]:
        """Remove installed dependencies and build output. Returns removed paths."""
        config = self.config
        project_path = directory.path if isinstance(directory, OutputDirectory) else Path(directory)

        removed = []
        for name in (config.dependency_dir, config.artifact_dir):
            target = project_path / name
            if target.is_dir():
                shutil.rmtree(target)
                removed.append(str(target))
                logger.info(f"Removed {target}")
        return removed
