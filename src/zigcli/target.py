"""Target triple parsing and host -> zig vocabulary translation.

Host build systems describe targets with LLVM/Rust style triples
(``arch-vendor-os[-env]``); zig expects ``arch-os[-abi]`` with its own names
for several architectures, operating systems and ABIs. Translation is a plain
table lookup. When any component is missing from its table the host triple is
handed to zig unchanged so zig itself reports what it does not support.
"""

from __future__ import annotations

from dataclasses import dataclass

ARCH_ALIASES: dict[str, str] = {
    "x86_64": "x86_64",
    "x86_64h": "x86_64",
    "amd64": "x86_64",
    "i386": "x86",
    "i486": "x86",
    "i586": "x86",
    "i686": "x86",
    "x86": "x86",
    "aarch64": "aarch64",
    "arm64": "aarch64",
    "arm64e": "aarch64",
    "aarch64_be": "aarch64_be",
    "arm": "arm",
    "armv5te": "arm",
    "armv6": "arm",
    "armv7": "arm",
    "armv7a": "arm",
    "armv7r": "arm",
    "armv7s": "arm",
    "armv7k": "arm",
    "armebv7r": "armeb",
    "thumbv6m": "thumb",
    "thumbv7m": "thumb",
    "thumbv7em": "thumb",
    "thumbv7neon": "thumb",
    "thumbv8m.base": "thumb",
    "thumbv8m.main": "thumb",
    "riscv32i": "riscv32",
    "riscv32imc": "riscv32",
    "riscv32imac": "riscv32",
    "riscv32gc": "riscv32",
    "riscv32": "riscv32",
    "riscv64gc": "riscv64",
    "riscv64": "riscv64",
    "powerpc": "powerpc",
    "powerpc64": "powerpc64",
    "powerpc64le": "powerpc64le",
    "s390x": "s390x",
    "sparc64": "sparc64",
    "mips": "mips",
    "mipsel": "mipsel",
    "mips64": "mips64",
    "mips64el": "mips64el",
    "loongarch64": "loongarch64",
    "wasm32": "wasm32",
    "wasm64": "wasm64",
    "hexagon": "hexagon",
    "avr": "avr",
    "bpfel": "bpfel",
    "bpfeb": "bpfeb",
    "msp430": "msp430",
    "nvptx64": "nvptx64",
}

VENDORS = frozenset(
    {
        "unknown",
        "pc",
        "apple",
        "uwp",
        "sun",
        "nvidia",
        "fortanix",
        "wrs",
        "sony",
        "nintendo",
        "esp",
        "kmc",
        "unikraft",
        "win7",
    }
)

OS_ALIASES: dict[str, str] = {
    "linux": "linux",
    "darwin": "macos",
    "macos": "macos",
    "macosx": "macos",
    "ios": "ios",
    "tvos": "tvos",
    "watchos": "watchos",
    "visionos": "visionos",
    "windows": "windows",
    "freebsd": "freebsd",
    "netbsd": "netbsd",
    "openbsd": "openbsd",
    "dragonfly": "dragonfly",
    "illumos": "illumos",
    "solaris": "solaris",
    "haiku": "haiku",
    "fuchsia": "fuchsia",
    "hermit": "hermit",
    "wasi": "wasi",
    "wasip1": "wasi",
    "emscripten": "emscripten",
    "uefi": "uefi",
    "cuda": "cuda",
    "none": "freestanding",
    "unknown": "freestanding",
    "freestanding": "freestanding",
}

ABI_ALIASES: dict[str, str] = {
    "": "",
    "gnu": "gnu",
    "gnullvm": "gnu",
    "gnueabi": "gnueabi",
    "gnueabihf": "gnueabihf",
    "gnux32": "gnux32",
    "gnuabi64": "gnuabi64",
    "gnuabin32": "gnuabin32",
    "musl": "musl",
    "musleabi": "musleabi",
    "musleabihf": "musleabihf",
    "muslabi64": "muslabi64",
    "android": "android",
    "androideabi": "androideabi",
    "eabi": "eabi",
    "eabihf": "eabihf",
    "elf": "none",
    "softfloat": "none",
    "msvc": "msvc",
    "macabi": "macabi",
    "sim": "simulator",
    "simulator": "simulator",
    "ohos": "ohos",
}

APPLE_OSES = frozenset({"macos", "ios", "tvos", "watchos", "visionos"})
BSD_OSES = frozenset({"freebsd", "netbsd", "openbsd", "dragonfly"})

# x86 feature names that differ between rustc/LLVM and zig.
X86_FEATURE_ALIASES: dict[str, str] = {
    "avx512vbmi1": "avx512vbmi",
    "bmi1": "bmi",
    "cmpxchg16b": "cx16",
    "rdrand": "rdrnd",
    "lahfsahf": "sahf",
    "pclmulqdq": "pclmul",
}


@dataclass(frozen=True, slots=True)
class TargetTriple:
    arch: str
    vendor: str
    os: str
    env: str
    raw: str

    @classmethod
    def parse(cls, text: str) -> TargetTriple:
        """Split a host triple into its components.

        Accepts ``arch-vendor-os-env``, ``arch-vendor-os``, ``arch-os-env``
        and ``arch-os``. The three-part form is disambiguated by checking the
        second component against the known vendor names. Anything else keeps
        only the raw text.
        """
        parts = text.split("-")
        if len(parts) == 4:
            arch, vendor, os_name, env = parts
        elif len(parts) == 3 and parts[1] in VENDORS:
            arch, vendor, os_name = parts
            env = ""
        elif len(parts) == 3:
            arch, os_name, env = parts
            vendor = ""
        elif len(parts) == 2:
            arch, os_name = parts
            vendor = env = ""
        else:
            return cls(arch="", vendor="", os="", env="", raw=text)
        return cls(arch=arch, vendor=vendor, os=os_name, env=env, raw=text)

    @property
    def zig_arch(self) -> str | None:
        return ARCH_ALIASES.get(self.arch)

    @property
    def zig_os(self) -> str | None:
        return OS_ALIASES.get(self.os)

    @property
    def zig_abi(self) -> str | None:
        return ABI_ALIASES.get(self.env)

    @property
    def is_windows(self) -> bool:
        return self.zig_os == "windows"

    @property
    def is_apple(self) -> bool:
        return self.zig_os in APPLE_OSES

    def to_zig(self) -> str:
        arch, os_name, abi = self.zig_arch, self.zig_os, self.zig_abi
        if arch is None or os_name is None or abi is None:
            return self.raw
        return f"{arch}-{os_name}-{abi}" if abi else f"{arch}-{os_name}"

    def __str__(self) -> str:
        return self.raw


def to_zig_triple(text: str) -> str:
    return TargetTriple.parse(text).to_zig()


def translate_cpu_feature(arch: str, feature: str) -> str:
    """Map a rustc/LLVM CPU feature name onto zig's spelling."""
    feature = feature.replace("-", "_").replace(".", "_")
    if arch.startswith("x86") or ARCH_ALIASES.get(arch) == "x86":
        return X86_FEATURE_ALIASES.get(feature, feature)
    return feature
