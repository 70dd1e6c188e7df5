"""
Core services for keyward
"""

from .credential_directory import CredentialDirectory
from .iam_directory import IAMCredentialDirectory
from .secret_escrow import SecretEscrow, SecretEscrowWriter
from .secrets_manager_escrow import SecretsManagerEscrow
from .local_escrow import LocalEscrowStore
from .key_inventory import KeyInventoryResolver
from .rotation_policy import RotationPolicyEngine
from .confirmation import ConfirmationGate, InteractiveConfirmation, ScriptedConfirmation
from .mutation_executor import MutationExecutor
from .notification import NotificationComposer
from .rotation_workflow import RotationWorkflow

__all__ = [
    'CredentialDirectory', 'IAMCredentialDirectory',
    'SecretEscrow', 'SecretEscrowWriter', 'SecretsManagerEscrow', 'LocalEscrowStore',
    'KeyInventoryResolver', 'RotationPolicyEngine',
    'ConfirmationGate', 'InteractiveConfirmation', 'ScriptedConfirmation',
    'MutationExecutor', 'NotificationComposer', 'RotationWorkflow'
]
