"""
L0 Data — component catalog tables.

Pure data, no logic. Each key is a stable ComponentKey shared by all
distro families. An entry carries either:

    "packages":  distro → concrete package name   (native component)
    "installer": registered installer name        (special component)

A native entry without a mapping for some distro is inert there; the
catalog refuses to resolve it rather than silently dropping it.
"""

from __future__ import annotations


def _same(name: str) -> dict[str, str]:
    """Native mapping for a package named identically on every distro."""
    return {"arch": name, "debian": name}


COMPONENTS: dict[str, dict] = {

    # ── Window manager desktop ─────────────────────────────────

    "i3wm": {
        "label": "Improved dynamic tiling window manager",
        "packages": _same("i3-wm"),
    },
    "polybar": {
        "label": "Fast and easy-to-use status bar",
        "packages": _same("polybar"),
    },
    "rofi": {
        "label": "Window switcher, run launcher, ssh-launcher and more",
        "packages": _same("rofi"),
    },
    "dunst": {
        "label": "Lightweight notification daemon",
        "packages": _same("dunst"),
    },
    "picom": {
        "label": "Standalone compositor for X11",
        "packages": _same("picom"),
    },
    "i3lock_color": {
        "label": "Simple lockscreen session locker for i3wm with good themes",
        "installer": "i3lock_color",
    },
    "betterlockscreen": {
        "label": "Simple lockscreen session locker for i3wm (installed via script)",
        "installer": "betterlockscreen",
    },
    "xrandr": {
        "label": "Interact with the X RandR extension to set screen size/position",
        "packages": {"arch": "xorg-xrandr", "debian": "x11-xserver-utils"},
    },
    "autorandr": {
        "label": "Auto-detect and use saved XRandR profiles",
        "packages": _same("autorandr"),
    },
    "dispwin": {
        "label": "Load ICC profiles into the display system (from ArgyllCMS)",
        "packages": {"arch": "argyllcms", "debian": "argyll"},
    },
    "wireplumber": {
        "label": "Session and policy manager for PipeWire",
        "packages": _same("wireplumber"),
    },
    "libnotify": {
        "label": "Library for sending desktop notifications",
        "packages": {"arch": "libnotify", "debian": "libnotify-bin"},
    },
    "policykit": {
        "label": "PolicyKit authentication agent for GNOME/GTK",
        "packages": {"arch": "polkit-gnome", "debian": "policykit-1-gnome"},
    },
    "feh": {
        "label": "Lightweight image viewer and wallpaper setter for X11",
        "packages": _same("feh"),
    },
    "dex": {
        "label": "Desktop entry executor for autostarting .desktop files",
        "packages": _same("dex"),
    },
    "networkmanager": {
        "label": "Daemon for managing network connections (wired and wireless)",
        "packages": {"arch": "networkmanager", "debian": "network-manager"},
    },
    "network_manager_applet": {
        "label": "System tray applet for NetworkManager",
        "packages": _same("network-manager-applet"),
    },
    "xautolock": {
        "label": "Automatic screen locking daemon after a period of inactivity",
        "packages": _same("xautolock"),
    },
    "easyeffects": {
        "label": "Advanced audio effects and equalizer for PipeWire",
        "installer": "easyeffects",
    },
    "thunar": {
        "label": "A good lightweight file explorer",
        "installer": "thunar",
    },

    # ── Developer tools ────────────────────────────────────────

    "nvim": {
        "label": "Modern Vim-based text editor",
        "installer": "nvim",
    },
    "alacritty": {
        "label": "GPU-accelerated terminal emulator",
        "installer": "alacritty",
    },
    "tmux": {
        "label": "Terminal multiplexer for managing sessions",
        "packages": _same("tmux"),
    },
    "zsh": {
        "label": "Powerful interactive shell",
        "packages": _same("zsh"),
    },
    "fzf": {
        "label": "Command-line fuzzy finder (used by nvim)",
        "installer": "fzf",
    },
    "miniconda": {
        "label": "A mini version of Conda for Python",
        "installer": "miniconda",
    },
    "node": {
        "label": "Node.js runtime via nvm (nvim plugins, web dev)",
        "installer": "node",
    },
    "rust": {
        "label": "Rust toolchain via rustup (alacritty build, systems work)",
        "installer": "rust",
    },

    # ── Extras (not in any menu group) ─────────────────────────

    "coolercontrol": {
        "label": "Cooling device monitor and control daemon",
        "installer": "coolercontrol",
    },
}


GROUPS: dict[str, dict] = {
    "i3": {
        "label": "i3wm setup packages",
        "keys": [
            "i3wm", "polybar", "rofi", "dunst", "picom", "i3lock_color",
            "betterlockscreen", "xrandr", "autorandr", "dispwin",
            "wireplumber", "libnotify", "policykit", "feh", "dex",
            "networkmanager", "network_manager_applet", "xautolock",
            "easyeffects", "thunar",
        ],
    },
    "dev": {
        "label": "Dev tools",
        "keys": [
            "nvim", "alacritty", "tmux", "zsh", "fzf", "miniconda",
            "node", "rust",
        ],
    },
}


# Ensured before any menu action — fetch/build tools every installer relies on.
BASE_PACKAGES: dict[str, list[str]] = {
    "arch": ["wget", "base-devel", "unzip", "curl", "make", "python", "libdrm", "git"],
    "debian": [
        "wget", "build-essential", "unzip", "curl", "make",
        "python3", "python3-pip", "libdrm-dev", "git",
    ],
}
