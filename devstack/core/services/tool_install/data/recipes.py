"""
L0 Data: Tool recipe registry.

One entry per catalog tool. Pure data, no logic.

Only Linux needs per-tool sequences: Homebrew and Chocolatey are driven
uniformly by the tool id (see ``resolver/method_selection.py``).

Fields:
    label      Human-readable name.
    cli        Command name probed on PATH (defaults to the tool id).
    category   Grouping for status output.
    install    ``{platform: {"method": ..., "steps": [...]}}``.
    remove     ``{platform: [step, ...]}``: overrides the package-manager
               purge for tools installed outside the package manager.
    packages   ``{platform: [name, ...]}``: package names for the purge
               (defaults to the tool id).

A step is ``{"label": str, "command": list[str], "needs_sudo": bool}``.
"""

from __future__ import annotations


def _step(label: str, command: list[str], *, sudo: bool = False) -> dict:
    return {"label": label, "command": command, "needs_sudo": sudo}


def _apt_install(*packages: str) -> dict:
    return _step(
        f"apt-get install {' '.join(packages)}",
        ["apt-get", "install", "-y", *packages],
        sudo=True,
    )


def _binary_download(name: str, url: str) -> list[dict]:
    """Download a release binary and install it to /usr/local/bin."""
    staged = f"/tmp/{name}"
    return [
        _step(f"Download {name}", ["curl", "-fsSL", "-o", staged, url]),
        _step(
            f"Install {name} to /usr/local/bin",
            ["install", "-m", "755", staged, f"/usr/local/bin/{name}"],
            sudo=True,
        ),
        _step(f"Remove staged {name}", ["rm", "-f", staged]),
    ]


def _binary_remove(*paths: str) -> list[dict]:
    return [_step(f"Remove {paths[0]}", ["rm", "-rf", *paths], sudo=True)]


_HASHICORP_KEYRING = "/usr/share/keyrings/hashicorp-archive-keyring.gpg"
_HASHICORP_LIST = "/etc/apt/sources.list.d/hashicorp.list"


TOOL_RECIPES: dict[str, dict] = {

    # ── Infrastructure as code ──────────────────────────────────

    "terraform": {
        "label": "Terraform",
        "cli": "terraform",
        "category": "iac",
        # Not in the distribution archive: HashiCorp's signed apt repo.
        "install": {
            "linux": {
                "method": "repo_add_then_install",
                "steps": [
                    _step(
                        "Add HashiCorp signing key",
                        ["bash", "-c",
                         "curl -fsSL https://apt.releases.hashicorp.com/gpg"
                         f" | gpg --dearmor --yes -o {_HASHICORP_KEYRING}"],
                        sudo=True,
                    ),
                    _step(
                        "Add HashiCorp apt repository",
                        ["bash", "-c",
                         f'echo "deb [signed-by={_HASHICORP_KEYRING}]'
                         ' https://apt.releases.hashicorp.com'
                         ' $(lsb_release -cs) main"'
                         f" | tee {_HASHICORP_LIST}"],
                        sudo=True,
                    ),
                    _step(
                        "Refresh package index",
                        ["apt-get", "update", "-y"],
                        sudo=True,
                    ),
                    _apt_install("terraform"),
                ],
            },
        },
        "remove": {
            "linux": [
                _step(
                    "apt-get purge terraform",
                    ["apt-get", "remove", "--purge", "-y", "terraform"],
                    sudo=True,
                ),
                _step(
                    "Remove HashiCorp apt repository",
                    ["rm", "-f", _HASHICORP_LIST, _HASHICORP_KEYRING],
                    sudo=True,
                ),
            ],
        },
    },

    "terragrunt": {
        "label": "Terragrunt",
        "cli": "terragrunt",
        "category": "iac",
        "install": {
            "linux": {
                "method": "direct_download_install",
                "steps": _binary_download(
                    "terragrunt",
                    "https://github.com/gruntwork-io/terragrunt/releases/"
                    "latest/download/terragrunt_linux_amd64",
                ),
            },
        },
        "remove": {"linux": _binary_remove("/usr/local/bin/terragrunt")},
    },

    # ── Cloud ───────────────────────────────────────────────────

    "awscli": {
        "label": "AWS CLI v2",
        "cli": "aws",
        "category": "cloud",
        # Official bundle: zip with its own installer into /usr/local/aws-cli.
        "install": {
            "linux": {
                "method": "direct_download_install",
                "steps": [
                    _step(
                        "Download AWS CLI bundle",
                        ["curl", "-fsSL", "-o", "/tmp/awscliv2.zip",
                         "https://awscli.amazonaws.com/"
                         "awscli-exe-linux-x86_64.zip"],
                    ),
                    _step(
                        "Extract AWS CLI bundle",
                        ["unzip", "-o", "-q", "/tmp/awscliv2.zip", "-d", "/tmp"],
                    ),
                    _step("Run AWS CLI installer", ["/tmp/aws/install"], sudo=True),
                    _step(
                        "Remove AWS CLI bundle",
                        ["rm", "-rf", "/tmp/awscliv2.zip", "/tmp/aws"],
                    ),
                ],
            },
        },
        "remove": {
            "linux": _binary_remove(
                "/usr/local/aws-cli",
                "/usr/local/bin/aws",
                "/usr/local/bin/aws_completer",
            ),
        },
    },

    # ── Version control ─────────────────────────────────────────

    "git": {
        "label": "Git",
        "cli": "git",
        "category": "vcs",
        "install": {
            "linux": {
                "method": "package_manager_install",
                "steps": [_apt_install("git")],
            },
        },
    },

    # ── Policy ──────────────────────────────────────────────────

    "opa": {
        "label": "Open Policy Agent",
        "cli": "opa",
        "category": "policy",
        "install": {
            "linux": {
                "method": "direct_download_install",
                "steps": _binary_download(
                    "opa",
                    "https://openpolicyagent.org/downloads/latest/opa_linux_amd64",
                ),
            },
        },
        "remove": {"linux": _binary_remove("/usr/local/bin/opa")},
    },

    # ── Language runtimes ───────────────────────────────────────

    "python3": {
        "label": "Python 3",
        "cli": "python3",
        "category": "language",
        "install": {
            "linux": {
                "method": "package_manager_install",
                "steps": [_apt_install("python3", "python3-pip", "python3-venv")],
            },
        },
        # The interpreter itself stays: the OS depends on it.
        "packages": {"linux": ["python3-pip", "python3-venv"]},
    },

    # ── Kubernetes ──────────────────────────────────────────────

    "helm": {
        "label": "Helm",
        "cli": "helm",
        "category": "k8s",
        # get-helm-3 detects OS/arch and escalates on its own.
        "install": {
            "linux": {
                "method": "direct_download_install",
                "steps": [
                    _step(
                        "Run get-helm-3 installer",
                        ["bash", "-c",
                         "curl -fsSL https://raw.githubusercontent.com/helm/helm"
                         "/main/scripts/get-helm-3 | bash"],
                    ),
                ],
            },
        },
        "remove": {"linux": _binary_remove("/usr/local/bin/helm")},
    },

    "kubectl": {
        "label": "kubectl",
        "cli": "kubectl",
        "category": "k8s",
        "install": {
            "linux": {
                "method": "direct_download_install",
                "steps": [
                    _step(
                        "Download kubectl (latest stable)",
                        ["bash", "-c",
                         "curl -fsSL -o /tmp/kubectl"
                         ' "https://dl.k8s.io/release/'
                         '$(curl -fsSL https://dl.k8s.io/release/stable.txt)'
                         '/bin/linux/amd64/kubectl"'],
                    ),
                    _step(
                        "Install kubectl to /usr/local/bin",
                        ["install", "-m", "755", "/tmp/kubectl",
                         "/usr/local/bin/kubectl"],
                        sudo=True,
                    ),
                    _step("Remove staged kubectl", ["rm", "-f", "/tmp/kubectl"]),
                ],
            },
        },
        "remove": {"linux": _binary_remove("/usr/local/bin/kubectl")},
    },

    # ── File transfer ───────────────────────────────────────────

    "rsync": {
        "label": "rsync",
        "cli": "rsync",
        "category": "utility",
        "install": {
            "linux": {
                "method": "package_manager_install",
                "steps": [_apt_install("rsync")],
            },
        },
    },
}
