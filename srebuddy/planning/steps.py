"""Step generators for implementation plans.

A step generator turns a task descriptor into an ordered list of
implementation steps. Generators are looked up by target name in
``STEP_GENERATORS``; targets without a dedicated generator get the generic
research/prepare/implement/validate sequence.
"""

from typing import Callable, Dict, List

from srebuddy.models import ImplementationStep, TaskDescriptor

StepGenerator = Callable[[TaskDescriptor], List[ImplementationStep]]

DYNATRACE_DEFAULT_NAMESPACE = "dynatrace"

DYNATRACE_DAEMONSET = """apiVersion: apps/v1
kind: DaemonSet
metadata:
  name: dynatrace-oneagent
  namespace: {namespace}
spec:
  selector:
    matchLabels:
      name: dynatrace-oneagent
  template:
    metadata:
      labels:
        name: dynatrace-oneagent
    spec:
      containers:
      - name: dynatrace-oneagent
        image: dynatrace/oneagent
        env:
        - name: DT_TENANT
          valueFrom:
            secretKeyRef:
              name: dynatrace-secret
              key: tenant
        - name: DT_API_TOKEN
          valueFrom:
            secretKeyRef:
              name: dynatrace-secret
              key: apiToken
        - name: DT_CLUSTER_ID
          value: "production-cluster"
        securityContext:
          privileged: true
        volumeMounts:
        - name: host-root
          mountPath: /mnt/root
      volumes:
      - name: host-root
        hostPath:
          path: /
      hostNetwork: true
      hostPID: true
      hostIPC: true"""


def dynatrace_manifest(descriptor: TaskDescriptor) -> str:
    """OneAgent DaemonSet manifest, placed in the requested namespace."""
    namespace = descriptor.parameters.get("namespace") or DYNATRACE_DEFAULT_NAMESPACE
    return DYNATRACE_DAEMONSET.format(namespace=namespace)


def dynatrace_steps(descriptor: TaskDescriptor) -> List[ImplementationStep]:
    return [
        ImplementationStep(
            step=1,
            title="Retrieve Dynatrace Configuration",
            description="Get tenant ID and API token from internal documentation",
            documentation=["Dynatrace Setup Guide", "Security Token Management"],
        ),
        ImplementationStep(
            step=2,
            title="Deploy OneAgent",
            description="Install Dynatrace OneAgent as DaemonSet",
            code_example=dynatrace_manifest(descriptor),
            validation_steps=["Check pod status", "Verify agent connectivity"],
        ),
        ImplementationStep(
            step=3,
            title="Configure Monitoring Rules",
            description="Set up application monitoring and alerting rules",
            validation_steps=["Test alert triggers", "Validate metrics collection"],
        ),
    ]


def prometheus_steps(descriptor: TaskDescriptor) -> List[ImplementationStep]:
    return [
        ImplementationStep(
            step=1,
            title="Deploy Prometheus Server",
            description="Set up Prometheus server with persistent storage",
            code_example="kubectl apply -f prometheus-deployment.yaml",
        ),
        ImplementationStep(
            step=2,
            title="Configure Service Discovery",
            description="Set up automatic service discovery for monitoring targets",
        ),
        ImplementationStep(
            step=3,
            title="Create Alerting Rules",
            description="Define alerting rules for SRE metrics and SLIs",
        ),
    ]


def kubernetes_steps(descriptor: TaskDescriptor) -> List[ImplementationStep]:
    return [
        ImplementationStep(
            step=1,
            title="Create Namespace",
            description="Set up dedicated namespace for the application",
        ),
        ImplementationStep(
            step=2,
            title="Deploy Application",
            description="Create deployment and service manifests",
        ),
        ImplementationStep(
            step=3,
            title="Configure Ingress",
            description="Set up ingress controller and routing rules",
        ),
    ]


def generic_steps(descriptor: TaskDescriptor) -> List[ImplementationStep]:
    target = descriptor.target
    return [
        ImplementationStep(
            step=1,
            title="Research and Planning",
            description=f"Research {target} implementation requirements and best practices",
        ),
        ImplementationStep(
            step=2,
            title="Environment Preparation",
            description="Prepare target environment and install dependencies",
        ),
        ImplementationStep(
            step=3,
            title="Implementation",
            description=f"Deploy and configure {target}",
        ),
        ImplementationStep(
            step=4,
            title="Validation and Testing",
            description="Validate implementation and run acceptance tests",
        ),
    ]


STEP_GENERATORS: Dict[str, StepGenerator] = {
    "dynatrace": dynatrace_steps,
    "prometheus": prometheus_steps,
    "kubernetes": kubernetes_steps,
}


def register_step_generator(target: str, generator: StepGenerator) -> None:
    """Register a step generator for a target, replacing any existing one."""
    STEP_GENERATORS[target.lower()] = generator


def get_step_generator(target: str) -> StepGenerator:
    return STEP_GENERATORS.get(target.lower(), generic_steps)
