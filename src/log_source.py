"""Kubernetes-backed source of container log lines.

This module is the only Kubernetes touchpoint; everything downstream works on
ScrapeTarget values and plain lists of lines.
"""

import logging

from kubernetes import client, config
from kubernetes.client.rest import ApiException
from urllib3.exceptions import HTTPError

from src.models import ScrapeTarget

logger = logging.getLogger(__name__)


class LogSourceError(Exception):
    """Listing pods or reading a container log failed."""


def split_log_lines(text: str) -> list[str]:
    """Split on newlines only, dropping one trailing carriage return per line.

    Other control characters stay inside the line they belong to. A final
    newline does not produce an empty trailing line.
    """
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def load_core_api() -> client.CoreV1Api:
    """Build a CoreV1Api, preferring in-cluster config over kubeconfig."""
    try:
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes config")
    except config.ConfigException:
        try:
            config.load_kube_config()
            logger.info("Loaded kubeconfig")
        except config.ConfigException as exc:
            raise LogSourceError(f"could not load Kubernetes config: {exc}") from exc
    return client.CoreV1Api()


class KubernetesLogSource:
    def __init__(self, namespace: str, pod_selector: str = "", timeout: int = 10,
                 core_api: client.CoreV1Api | None = None):
        self._namespace = namespace
        self._pod_selector = pod_selector
        self._timeout = timeout
        self._api = core_api if core_api is not None else load_core_api()

    def list_targets(self) -> list[ScrapeTarget]:
        """Return one target per container of every Running pod in the namespace."""
        kwargs = {"_request_timeout": self._timeout}
        if self._pod_selector:
            kwargs["label_selector"] = self._pod_selector

        try:
            pods = self._api.list_namespaced_pod(self._namespace, **kwargs)
        except (ApiException, HTTPError) as exc:
            raise LogSourceError(
                f"failed to list pods in namespace {self._namespace}: {exc}"
            ) from exc

        logger.info("Found %d pods in namespace %s", len(pods.items), self._namespace)

        targets = []
        for pod in pods.items:
            if pod.status is None or pod.status.phase != "Running":
                continue
            for container in pod.spec.containers:
                targets.append(ScrapeTarget(pod=pod.metadata.name, container=container.name))
        return targets

    def tail(self, pod: str, container: str, lines: int) -> list[str]:
        """Return the last *lines* lines of a container's log."""
        try:
            # Raw bytes: the client would otherwise json-decode log bodies.
            resp = self._api.read_namespaced_pod_log(
                name=pod,
                namespace=self._namespace,
                container=container,
                tail_lines=lines,
                follow=False,
                _preload_content=False,
                _request_timeout=self._timeout,
            )
            try:
                data = resp.data
            finally:
                resp.release_conn()
        except (ApiException, HTTPError) as exc:
            raise LogSourceError(
                f"failed to get logs for pod {pod}, container {container}: {exc}"
            ) from exc

        return split_log_lines(data.decode("utf-8", errors="replace"))
