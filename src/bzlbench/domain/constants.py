from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Provides centralized access to generator-wide constants: file naming of the
emitted Bazel workspace, default tree topology, the pinned Bazel version,
and the catalogue of Apple system frameworks available to stub headers.
"""

from typing import List

# -----------------------------------------------------------------------------
# WORKSPACE LAYOUT
# -----------------------------------------------------------------------------
BUILD_FILE_NAME = "BUILD.bazel"
WORKSPACE_FILE_NAME = "WORKSPACE"
BAZEL_VERSION_FILE_NAME = ".bazelversion"
ENTRY_POINT_FILE_NAME = "main.m"

PACKAGE_SEGMENT_PREFIX = "pkg_"
LIBRARY_SEGMENT_PREFIX = "lib_"
ROOT_TARGET_NAME = "root"

DEFAULT_BAZEL_VERSION = "5.0.0.7"
DEFAULT_WORKSPACE_TEMPLATE = "~/GEN_WORKSPACE"
DEFAULT_BUNDLE_ID = "com.bazel.benchmark"
DEFAULT_MINIMUM_OS_VERSION = "15.0"

# -----------------------------------------------------------------------------
# TOPOLOGY DEFAULTS
# -----------------------------------------------------------------------------
DEFAULT_HEIGHT = 3
DEFAULT_TARGETS_PER_LEVEL = 3
DEFAULT_FILES_PER_TARGET = 1
DEFAULT_CONCURRENCY = 64

# Thread name prefix of the emission pool; log lines label these threads
EMIT_WORKER_PREFIX = "EmitWorker"

# Framework every stub header imports unless the full catalogue is requested
BASE_FRAMEWORK = "Foundation"

# -----------------------------------------------------------------------------
# APPLE SYSTEM FRAMEWORKS
# -----------------------------------------------------------------------------
ALL_FRAMEWORKS: List[str] = [
    "ARKit", "AVFAudio", "AVFoundation", "AVKit", "Accelerate",
    "Accessibility", "Accounts", "AdServices", "AdSupport", "AddressBook",
    "AddressBookUI", "AppClip", "AppTrackingTransparency", "AssetsLibrary",
    "AudioToolbox", "AudioUnit", "AuthenticationServices",
    "AutomaticAssessmentConfiguration", "BackgroundTasks", "BusinessChat",
    "CFNetwork", "CallKit", "CarPlay", "ClassKit", "ClockKit", "CloudKit",
    "Contacts", "ContactsUI", "CoreAudio", "CoreAudioKit", "CoreAudioTypes",
    "CoreBluetooth", "CoreData", "CoreFoundation", "CoreGraphics",
    "CoreHaptics", "CoreImage", "CoreLocation", "CoreLocationUI", "CoreMIDI",
    "CoreML", "CoreMedia", "CoreMotion", "CoreNFC", "CoreServices",
    "CoreSpotlight", "CoreTelephony", "CoreText", "CoreVideo",
    "DataDetection", "DeviceCheck", "EventKit", "EventKitUI",
    "ExposureNotification", "ExternalAccessory", "FileProvider",
    "FileProviderUI", "Foundation", "GLKit", "GSS", "GameController",
    "GameKit", "GameplayKit", "GroupActivities", "HealthKit", "HealthKitUI",
    "HomeKit", "IOSurface", "IdentityLookup", "IdentityLookupUI",
    "ImageCaptureCore", "ImageIO", "Intents", "IntentsUI", "JavaScriptCore",
    "LinkPresentation", "LocalAuthentication", "MapKit",
    "MediaAccessibility", "MediaPlayer", "MediaToolbox", "MessageUI",
    "Messages", "Metal", "MetalKit", "MetalPerformanceShaders",
    "MetalPerformanceShadersGraph", "MetricKit", "MobileCoreServices",
    "ModelIO", "MultipeerConnectivity", "NaturalLanguage",
    "NearbyInteraction", "Network", "NetworkExtension", "NewsstandKit",
    "NotificationCenter", "OSLog", "OpenAL", "OpenGLES", "PDFKit", "PHASE",
    "PassKit", "PencilKit", "Photos", "PhotosUI", "PushKit", "QuartzCore",
    "QuickLook", "QuickLookThumbnailing", "ReplayKit", "SafariServices",
    "SceneKit", "ScreenTime", "Security", "SensorKit", "ShazamKit", "Social",
    "SoundAnalysis", "Speech", "SpriteKit", "StoreKit", "SwiftUI",
    "SystemConfiguration", "UIKit", "UniformTypeIdentifiers",
    "UserNotifications", "UserNotificationsUI", "VideoToolbox", "Vision",
    "VisionKit", "WatchConnectivity", "WebKit", "WidgetKit", "iAd",
]
