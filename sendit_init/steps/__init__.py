from .step_10_write_package_json import WritePackageJsonStep
from .step_20_copy_template import CopyTemplateStep
from .step_25_normalize_gitignore import NormalizeGitignoreStep
from .step_30_install_dependencies import InstallDependenciesStep
from .step_35_verify_typescript import VerifyTypeScriptStep
from .step_40_git_init import GitInitStep
from .step_50_print_instructions import PrintInstructionsStep
from .step_60_install_extras import InstallExtrasStep
from .step_70_deployment_template import DeploymentTemplateStep

__all__ = [
    "WritePackageJsonStep",
    "CopyTemplateStep",
    "NormalizeGitignoreStep",
    "InstallDependenciesStep",
    "VerifyTypeScriptStep",
    "GitInitStep",
    "PrintInstructionsStep",
    "InstallExtrasStep",
    "DeploymentTemplateStep",
]
