"""Java language constants used across metadata, rendering and build steps."""

from __future__ import annotations

IMPL_SUFFIX = "Impl"
SOURCE_EXTENSION = ".java"
CLASS_EXTENSION = ".class"

ROOT_TYPE = "java.lang.Object"
RECORD_TYPE = "java.lang.Record"
ENUM_TYPE = "java.lang.Enum"
MARKER_TYPES = frozenset({RECORD_TYPE, ENUM_TYPE})

# Types that exist for the platform's own use and cannot be meaningfully subclassed.
INTERNAL_TYPES = frozenset({"javax.annotation.processing.Completions"})

KIND_CLASS = "class"
KIND_INTERFACE = "interface"
KIND_ENUM = "enum"
KIND_RECORD = "record"
KIND_ANNOTATION = "annotation"
KIND_PRIMITIVE = "primitive"
TYPE_KINDS = frozenset(
    {KIND_CLASS, KIND_INTERFACE, KIND_ENUM, KIND_RECORD, KIND_ANNOTATION, KIND_PRIMITIVE}
)

PRIMITIVE_TYPES = frozenset(
    {"boolean", "byte", "char", "short", "int", "long", "float", "double", "void"}
)

# Canonical order used by java.lang.reflect.Modifier.toString.
MODIFIER_ORDER = (
    "public",
    "protected",
    "private",
    "abstract",
    "static",
    "final",
    "transient",
    "volatile",
    "synchronized",
    "native",
    "strictfp",
)
ACCESS_MODIFIERS = frozenset({"public", "protected", "private"})
KNOWN_MODIFIERS = frozenset(MODIFIER_ORDER) | {"default", "sealed", "non-sealed"}

# Modifiers that are illegal or meaningless on a generated concrete override.
STRIPPED_MEMBER_MODIFIERS = frozenset({"native", "transient", "abstract", "default"})

DEFAULT_MANIFEST = "Manifest-Version: 1.0\r\n\r\n"
MANIFEST_ENTRY = "META-INF/MANIFEST.MF"

# Simple names that resolve implicitly through java.lang in source files.
JAVA_LANG_TYPES = frozenset(
    {
        "AutoCloseable",
        "Boolean",
        "Byte",
        "CharSequence",
        "Character",
        "Class",
        "ClassNotFoundException",
        "CloneNotSupportedException",
        "Cloneable",
        "Comparable",
        "Double",
        "Enum",
        "Error",
        "Exception",
        "Float",
        "IllegalArgumentException",
        "IllegalStateException",
        "IndexOutOfBoundsException",
        "Integer",
        "InterruptedException",
        "Iterable",
        "Long",
        "Number",
        "Object",
        "Readable",
        "Record",
        "Runnable",
        "RuntimeException",
        "Short",
        "String",
        "StringBuilder",
        "Thread",
        "Throwable",
        "UnsupportedOperationException",
        "Void",
    }
)

# Well-known JDK types matched against on-demand (``.*``) imports in source files.
WELL_KNOWN_TYPES = frozenset(
    {
        "java.io.Closeable",
        "java.io.File",
        "java.io.IOException",
        "java.io.InputStream",
        "java.io.OutputStream",
        "java.io.Reader",
        "java.io.Serializable",
        "java.io.Writer",
        "java.nio.file.Path",
        "java.util.Collection",
        "java.util.Comparator",
        "java.util.Iterator",
        "java.util.List",
        "java.util.Map",
        "java.util.Optional",
        "java.util.Set",
        "java.util.concurrent.Callable",
        "java.util.function.Function",
        "java.util.function.Supplier",
    }
)
