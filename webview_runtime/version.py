"""Version information for the webview-runtime package."""

__version__ = "0.3.0"  # Python package version

# Vendor product the package installs
__runtime_product__ = "Microsoft.WebView2.FixedVersionRuntime"

# Component licenses
__license__ = "MIT"  # License for the Python package


def get_version_info():
    """Return version information as a dictionary."""
    return {
        "version": __version__,
        "runtime_product": __runtime_product__,
        "license": __license__,
    }
