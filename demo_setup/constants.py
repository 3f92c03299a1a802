"""
Constants for the RHACS / OpenShift AI demo setup.
"""

# Context every pipeline is forced onto before it runs
DEFAULT_REQUIRED_CONTEXT = "local-cluster"

# Exit code a sub-script uses to report "already installed"
ALREADY_INSTALLED_EXIT_CODE = 10

# Step group skipped when RHACS is already present on the cluster
RHACS_INSTALL_GROUP = "rhacs-install"

# RHACS Central
RHACS_OPERATOR_NAMESPACE = "rhacs-operator"
RHACS_FALLBACK_NAMESPACE = "stackrox"
CENTRAL_ROUTE_NAME = "central"
CENTRAL_HTPASSWD_SECRET = "central-htpasswd"
# Secret fields tried in order; older installs store adminPassword
CENTRAL_PASSWORD_FIELDS = ("password", "adminPassword")
ADMIN_USERNAME = "admin"

# Credential environment variables
ACS_PASSWORD_ENV = "ACS_PORTAL_PASSWORD"
ACS_PASSWORD_ALTERNATE_ENVS = ("ROX_ADMIN_PASSWORD", "ROX_PASSWORD")
KUBEADMIN_PASSWORD_ENV = "KUBEADMIN_PASSWORD"

# Variables written to the shell profile
TUTORIAL_HOME_ENV = "TUTORIAL_HOME"
ROX_CENTRAL_ADDRESS_ENV = "ROX_CENTRAL_ADDRESS"
ACS_USERNAME_ENV = "ACS_PORTAL_USERNAME"
GRPC_ALPN_ENV = "GRPC_ENFORCE_ALPN_ENABLED"

# OpenShift AI
DSC_NAMESPACE = "redhat-ods-applications"
DASHBOARD_ROUTE_NAME = "rhods-dashboard"
DASHBOARD_FALLBACK_SELECTOR = "app=odh-dashboard"
KUBEADMIN_SECRET = "kubeadmin"
KUBEADMIN_NAMESPACE = "kube-system"
# Identity provider secret used by workshop clusters (user:hash lines)
HTPASSWD_SECRET = "htpasswd"
HTPASSWD_NAMESPACE = "openshift-config"

# Demo applications repository
DEMO_APPS_REPO_URL = "https://github.com/SeanRickerd/demo-apps"
DEMO_APPS_BRANCH = "acs-demo-apps"
DEMO_APPS_DIRECTORY = "demo-apps"
DEMO_MANIFEST_DIRS = ("kubernetes-manifests", "skupper-demo")
DEMO_LABEL = "demo=roadshow"

# Shell profile holding persisted exports
DEFAULT_PROFILE = "~/.bashrc"
