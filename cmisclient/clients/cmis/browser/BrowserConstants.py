"""Wire key names of the CMIS browser binding and the schema key set of every converted structure.

Keys outside a structure's schema key set are carried as extension elements.
"""

##########################################
############### REPOSITORY ###############
##########################################

REPO_INFO_ID = "repositoryId"
REPO_INFO_NAME = "repositoryName"
REPO_INFO_DESCRIPTION = "repositoryDescription"
REPO_INFO_VENDOR = "vendorName"
REPO_INFO_PRODUCT = "productName"
REPO_INFO_PRODUCT_VERSION = "productVersion"
REPO_INFO_ROOT_FOLDER_ID = "rootFolderId"
REPO_INFO_CAPABILITIES = "capabilities"
REPO_INFO_ACL_CAPABILITIES = "aclCapabilities"
REPO_INFO_CHANGE_LOG_TOKEN = "latestChangeLogToken"
REPO_INFO_CMIS_VERSION_SUPPORTED = "cmisVersionSupported"
REPO_INFO_THIN_CLIENT_URI = "thinClientURI"
REPO_INFO_CHANGES_INCOMPLETE = "changesIncomplete"
REPO_INFO_CHANGES_ON_TYPE = "changesOnType"
REPO_INFO_PRINCIPAL_ID_ANONYMOUS = "principalIdAnonymous"
REPO_INFO_PRINCIPAL_ID_ANYONE = "principalIdAnyone"
REPO_INFO_EXTENDED_FEATURES = "extendedFeatures"
REPO_INFO_REPOSITORY_URL = "repositoryUrl"
REPO_INFO_ROOT_FOLDER_URL = "rootFolderUrl"

REPO_INFO_KEYS = frozenset({
    REPO_INFO_ID, REPO_INFO_NAME, REPO_INFO_DESCRIPTION, REPO_INFO_VENDOR, REPO_INFO_PRODUCT,
    REPO_INFO_PRODUCT_VERSION, REPO_INFO_ROOT_FOLDER_ID, REPO_INFO_CAPABILITIES, REPO_INFO_ACL_CAPABILITIES,
    REPO_INFO_CHANGE_LOG_TOKEN, REPO_INFO_CMIS_VERSION_SUPPORTED, REPO_INFO_THIN_CLIENT_URI,
    REPO_INFO_CHANGES_INCOMPLETE, REPO_INFO_CHANGES_ON_TYPE, REPO_INFO_PRINCIPAL_ID_ANONYMOUS,
    REPO_INFO_PRINCIPAL_ID_ANYONE, REPO_INFO_EXTENDED_FEATURES, REPO_INFO_REPOSITORY_URL,
    REPO_INFO_ROOT_FOLDER_URL,
})

CAP_CONTENT_STREAM_UPDATABILITY = "capabilityContentStreamUpdatability"
CAP_CHANGES = "capabilityChanges"
CAP_RENDITIONS = "capabilityRenditions"
CAP_GET_DESCENDANTS = "capabilityGetDescendants"
CAP_GET_FOLDER_TREE = "capabilityGetFolderTree"
CAP_MULTIFILING = "capabilityMultifiling"
CAP_UNFILING = "capabilityUnfiling"
CAP_VERSION_SPECIFIC_FILING = "capabilityVersionSpecificFiling"
CAP_PWC_SEARCHABLE = "capabilityPWCSearchable"
CAP_PWC_UPDATABLE = "capabilityPWCUpdatable"
CAP_ALL_VERSIONS_SEARCHABLE = "capabilityAllVersionsSearchable"
CAP_QUERY = "capabilityQuery"
CAP_JOIN = "capabilityJoin"
CAP_ACL = "capabilityACL"

CAP_KEYS = frozenset({
    CAP_CONTENT_STREAM_UPDATABILITY, CAP_CHANGES, CAP_RENDITIONS, CAP_GET_DESCENDANTS, CAP_GET_FOLDER_TREE,
    CAP_MULTIFILING, CAP_UNFILING, CAP_VERSION_SPECIFIC_FILING, CAP_PWC_SEARCHABLE, CAP_PWC_UPDATABLE,
    CAP_ALL_VERSIONS_SEARCHABLE, CAP_QUERY, CAP_JOIN, CAP_ACL,
})

ACL_CAP_SUPPORTED_PERMISSIONS = "supportedPermissions"
ACL_CAP_ACL_PROPAGATION = "propagation"
ACL_CAP_PERMISSIONS = "permissions"
ACL_CAP_PERMISSION_MAPPING = "permissionMapping"

ACL_CAP_KEYS = frozenset({
    ACL_CAP_SUPPORTED_PERMISSIONS, ACL_CAP_ACL_PROPAGATION, ACL_CAP_PERMISSIONS, ACL_CAP_PERMISSION_MAPPING,
})

ACL_CAP_PERMISSION_PERMISSION = "permission"
ACL_CAP_PERMISSION_DESCRIPTION = "description"

ACL_CAP_PERMISSION_KEYS = frozenset({ACL_CAP_PERMISSION_PERMISSION, ACL_CAP_PERMISSION_DESCRIPTION})

ACL_CAP_MAPPING_KEY = "key"
ACL_CAP_MAPPING_PERMISSION = "permission"

ACL_CAP_MAPPING_KEYS = frozenset({ACL_CAP_MAPPING_KEY, ACL_CAP_MAPPING_PERMISSION})

##########################################
################# TYPES ##################
##########################################

TYPE_ID = "id"
TYPE_BASE_ID = "baseId"
TYPE_DESCRIPTION = "description"
TYPE_DISPLAY_NAME = "displayName"
TYPE_CONTROLLABLE_ACL = "controllableACL"
TYPE_CONTROLLABLE_POLICY = "controllablePolicy"
TYPE_CREATABLE = "creatable"
TYPE_FILEABLE = "fileable"
TYPE_FULLTEXT_INDEXED = "fulltextIndexed"
TYPE_INCLUDED_IN_SUPERTYPE_QUERY = "includedInSupertypeQuery"
TYPE_QUERYABLE = "queryable"
TYPE_LOCAL_NAME = "localName"
TYPE_LOCAL_NAMESPACE = "localNamespace"
TYPE_PARENT_ID = "parentId"
TYPE_QUERY_NAME = "queryName"
TYPE_PROPERTY_DEFINITIONS = "propertyDefinitions"
TYPE_VERSIONABLE = "versionable"
TYPE_CONTENT_STREAM_ALLOWED = "contentStreamAllowed"
TYPE_ALLOWED_SOURCE_TYPES = "allowedSourceTypes"
TYPE_ALLOWED_TARGET_TYPES = "allowedTargetTypes"

TYPE_KEYS = frozenset({
    TYPE_ID, TYPE_BASE_ID, TYPE_DESCRIPTION, TYPE_DISPLAY_NAME, TYPE_CONTROLLABLE_ACL, TYPE_CONTROLLABLE_POLICY,
    TYPE_CREATABLE, TYPE_FILEABLE, TYPE_FULLTEXT_INDEXED, TYPE_INCLUDED_IN_SUPERTYPE_QUERY, TYPE_QUERYABLE,
    TYPE_LOCAL_NAME, TYPE_LOCAL_NAMESPACE, TYPE_PARENT_ID, TYPE_QUERY_NAME, TYPE_PROPERTY_DEFINITIONS,
    TYPE_VERSIONABLE, TYPE_CONTENT_STREAM_ALLOWED, TYPE_ALLOWED_SOURCE_TYPES, TYPE_ALLOWED_TARGET_TYPES,
})

TYPES_CONTAINER_TYPE = "type"
TYPES_CONTAINER_CHILDREN = "children"

TYPES_CONTAINER_KEYS = frozenset({TYPES_CONTAINER_TYPE, TYPES_CONTAINER_CHILDREN})

TYPES_LIST_TYPES = "types"
TYPES_LIST_HAS_MORE_ITEMS = "hasMoreItems"
TYPES_LIST_NUM_ITEMS = "numItems"

TYPES_LIST_KEYS = frozenset({TYPES_LIST_TYPES, TYPES_LIST_HAS_MORE_ITEMS, TYPES_LIST_NUM_ITEMS})

PROPERTY_TYPE_ID = "id"
PROPERTY_TYPE_LOCAL_NAME = "localName"
PROPERTY_TYPE_LOCAL_NAMESPACE = "localNamespace"
PROPERTY_TYPE_DISPLAY_NAME = "displayName"
PROPERTY_TYPE_QUERY_NAME = "queryName"
PROPERTY_TYPE_DESCRIPTION = "description"
PROPERTY_TYPE_PROPERTY_TYPE = "propertyType"
PROPERTY_TYPE_CARDINALITY = "cardinality"
PROPERTY_TYPE_UPDATABILITY = "updatability"
PROPERTY_TYPE_INHERITED = "inherited"
PROPERTY_TYPE_REQUIRED = "required"
PROPERTY_TYPE_QUERYABLE = "queryable"
PROPERTY_TYPE_ORDERABLE = "orderable"
PROPERTY_TYPE_OPEN_CHOICE = "openChoice"
PROPERTY_TYPE_DEFAULT_VALUE = "defaultValue"
PROPERTY_TYPE_MAX_LENGTH = "maxLength"
PROPERTY_TYPE_MIN_VALUE = "minValue"
PROPERTY_TYPE_MAX_VALUE = "maxValue"
PROPERTY_TYPE_PRECISION = "precision"
PROPERTY_TYPE_RESOLUTION = "resolution"
PROPERTY_TYPE_CHOICE = "choice"
PROPERTY_TYPE_CHOICE_DISPLAY_NAME = "displayName"
PROPERTY_TYPE_CHOICE_VALUE = "value"
PROPERTY_TYPE_CHOICE_CHOICE = "choice"

PROPERTY_TYPE_KEYS = frozenset({
    PROPERTY_TYPE_ID, PROPERTY_TYPE_LOCAL_NAME, PROPERTY_TYPE_LOCAL_NAMESPACE, PROPERTY_TYPE_DISPLAY_NAME,
    PROPERTY_TYPE_QUERY_NAME, PROPERTY_TYPE_DESCRIPTION, PROPERTY_TYPE_PROPERTY_TYPE, PROPERTY_TYPE_CARDINALITY,
    PROPERTY_TYPE_UPDATABILITY, PROPERTY_TYPE_INHERITED, PROPERTY_TYPE_REQUIRED, PROPERTY_TYPE_QUERYABLE,
    PROPERTY_TYPE_ORDERABLE, PROPERTY_TYPE_OPEN_CHOICE, PROPERTY_TYPE_DEFAULT_VALUE, PROPERTY_TYPE_MAX_LENGTH,
    PROPERTY_TYPE_MIN_VALUE, PROPERTY_TYPE_MAX_VALUE, PROPERTY_TYPE_PRECISION, PROPERTY_TYPE_RESOLUTION,
    PROPERTY_TYPE_CHOICE,
})

##########################################
################ OBJECTS #################
##########################################

OBJECT_PROPERTIES = "properties"
OBJECT_SUCCINCT_PROPERTIES = "succinctProperties"
OBJECT_PROPERTIES_EXTENSION = "propertiesExtension"
OBJECT_ALLOWABLE_ACTIONS = "allowableActions"
OBJECT_RELATIONSHIPS = "relationships"
OBJECT_CHANGE_EVENT_INFO = "changeEventInfo"
OBJECT_ACL = "acl"
OBJECT_EXACT_ACL = "exactACL"
OBJECT_POLICY_IDS = "policyIds"
OBJECT_POLICY_IDS_IDS = "ids"
OBJECT_RENDITIONS = "renditions"

OBJECT_KEYS = frozenset({
    OBJECT_PROPERTIES, OBJECT_SUCCINCT_PROPERTIES, OBJECT_PROPERTIES_EXTENSION, OBJECT_ALLOWABLE_ACTIONS,
    OBJECT_RELATIONSHIPS, OBJECT_CHANGE_EVENT_INFO, OBJECT_ACL, OBJECT_EXACT_ACL, OBJECT_POLICY_IDS,
    OBJECT_RENDITIONS,
})

POLICY_IDS_KEYS = frozenset({OBJECT_POLICY_IDS_IDS})

PROPERTY_ID = "id"
PROPERTY_LOCAL_NAME = "localName"
PROPERTY_DISPLAY_NAME = "displayName"
PROPERTY_QUERY_NAME = "queryName"
PROPERTY_VALUE = "value"
PROPERTY_DATATYPE = "type"
PROPERTY_CARDINALITY = "cardinality"

PROPERTY_KEYS = frozenset({
    PROPERTY_ID, PROPERTY_LOCAL_NAME, PROPERTY_DISPLAY_NAME, PROPERTY_QUERY_NAME, PROPERTY_VALUE,
    PROPERTY_DATATYPE, PROPERTY_CARDINALITY,
})

# succinct keys used for type resolution
PROPERTY_OBJECT_TYPE_ID = "cmis:objectTypeId"
PROPERTY_SECONDARY_OBJECT_TYPE_IDS = "cmis:secondaryObjectTypeIds"

OBJECT_IN_FOLDER_LIST_OBJECTS = "objects"
OBJECT_IN_FOLDER_LIST_HAS_MORE_ITEMS = "hasMoreItems"
OBJECT_IN_FOLDER_LIST_NUM_ITEMS = "numItems"

OBJECT_IN_FOLDER_LIST_KEYS = frozenset({
    OBJECT_IN_FOLDER_LIST_OBJECTS, OBJECT_IN_FOLDER_LIST_HAS_MORE_ITEMS, OBJECT_IN_FOLDER_LIST_NUM_ITEMS,
})

OBJECT_IN_FOLDER_OBJECT = "object"
OBJECT_IN_FOLDER_PATH_SEGMENT = "pathSegment"

OBJECT_IN_FOLDER_KEYS = frozenset({OBJECT_IN_FOLDER_OBJECT, OBJECT_IN_FOLDER_PATH_SEGMENT})

OBJECT_IN_FOLDER_CONTAINER_OBJECT = "object"
OBJECT_IN_FOLDER_CONTAINER_CHILDREN = "children"

OBJECT_IN_FOLDER_CONTAINER_KEYS = frozenset({OBJECT_IN_FOLDER_CONTAINER_OBJECT, OBJECT_IN_FOLDER_CONTAINER_CHILDREN})

OBJECT_PARENTS_OBJECT = "object"
OBJECT_PARENTS_RELATIVE_PATH_SEGMENT = "relativePathSegment"

OBJECT_PARENTS_KEYS = frozenset({OBJECT_PARENTS_OBJECT, OBJECT_PARENTS_RELATIVE_PATH_SEGMENT})

QUERY_RESULT_LIST_RESULTS = "results"
QUERY_RESULT_LIST_HAS_MORE_ITEMS = "hasMoreItems"
QUERY_RESULT_LIST_NUM_ITEMS = "numItems"

QUERY_RESULT_LIST_KEYS = frozenset({
    QUERY_RESULT_LIST_RESULTS, QUERY_RESULT_LIST_HAS_MORE_ITEMS, QUERY_RESULT_LIST_NUM_ITEMS,
})

OBJECT_LIST_OBJECTS = "objects"
OBJECT_LIST_HAS_MORE_ITEMS = "hasMoreItems"
OBJECT_LIST_NUM_ITEMS = "numItems"
OBJECT_LIST_CHANGE_LOG_TOKEN = "changeLogToken"

OBJECT_LIST_KEYS = frozenset({
    OBJECT_LIST_OBJECTS, OBJECT_LIST_HAS_MORE_ITEMS, OBJECT_LIST_NUM_ITEMS, OBJECT_LIST_CHANGE_LOG_TOKEN,
})

CHANGE_EVENT_TYPE = "changeType"
CHANGE_EVENT_TIME = "changeTime"

CHANGE_EVENT_KEYS = frozenset({CHANGE_EVENT_TYPE, CHANGE_EVENT_TIME})

FAILED_TO_DELETE_ID = "ids"

FAILED_TO_DELETE_KEYS = frozenset({FAILED_TO_DELETE_ID})

RENDITION_STREAM_ID = "streamId"
RENDITION_MIME_TYPE = "mimeType"
RENDITION_LENGTH = "length"
RENDITION_KIND = "kind"
RENDITION_TITLE = "title"
RENDITION_HEIGHT = "height"
RENDITION_WIDTH = "width"
RENDITION_DOCUMENT_ID = "renditionDocumentId"

RENDITION_KEYS = frozenset({
    RENDITION_STREAM_ID, RENDITION_MIME_TYPE, RENDITION_LENGTH, RENDITION_KIND, RENDITION_TITLE,
    RENDITION_HEIGHT, RENDITION_WIDTH, RENDITION_DOCUMENT_ID,
})

##########################################
################## ACL ###################
##########################################

ACL_ACES = "aces"
ACL_IS_EXACT = "isExact"

ACL_KEYS = frozenset({ACL_ACES, ACL_IS_EXACT})

ACE_PRINCIPAL = "principal"
ACE_PRINCIPAL_ID = "principalId"
ACE_PERMISSIONS = "permissions"
ACE_IS_DIRECT = "isDirect"

ACE_KEYS = frozenset({ACE_PRINCIPAL, ACE_PRINCIPAL_ID, ACE_PERMISSIONS, ACE_IS_DIRECT})

ACE_PRINCIPAL_KEYS = frozenset({ACE_PRINCIPAL_ID})

##########################################
############### SELECTORS ################
##########################################

SELECTOR_REPOSITORY_INFO = "repositoryInfo"
SELECTOR_TYPE_CHILDREN = "typeChildren"
SELECTOR_TYPE_DESCENDANTS = "typeDescendants"
SELECTOR_TYPE_DEFINITION = "typeDefinition"
SELECTOR_CONTENT = "content"
SELECTOR_OBJECT = "object"
SELECTOR_PROPERTIES = "properties"
SELECTOR_ALLOWABLE_ACTIONS = "allowableActions"
SELECTOR_RENDITIONS = "renditions"
SELECTOR_CHILDREN = "children"
SELECTOR_DESCENDANTS = "descendants"
SELECTOR_PARENTS = "parents"
SELECTOR_PARENT = "parent"
SELECTOR_FOLDER_TREE = "folder"
SELECTOR_QUERY = "query"
SELECTOR_VERSIONS = "versions"
SELECTOR_RELATIONSHIPS = "relationships"
SELECTOR_CHECKEDOUT = "checkedout"
SELECTOR_POLICIES = "policies"
SELECTOR_ACL = "acl"
SELECTOR_CONTENT_CHANGES = "contentChanges"

##########################################
########### CONTROLS / ACTIONS ###########
##########################################

CONTROL_CMISACTION = "cmisaction"
CONTROL_SUCCINCT = "succinct"
CONTROL_PROPERTY_ID = "propertyId"
CONTROL_PROPERTY_VALUE = "propertyValue"
CONTROL_POLICY = "policy"
CONTROL_ADD_ACE_PRINCIPAL = "addACEPrincipal"
CONTROL_ADD_ACE_PERMISSION = "addACEPermission"
CONTROL_REMOVE_ACE_PRINCIPAL = "removeACEPrincipal"
CONTROL_REMOVE_ACE_PERMISSION = "removeACEPermission"

ACTION_CREATE_DOCUMENT = "createDocument"
ACTION_CREATE_FOLDER = "createFolder"
ACTION_UPDATE_PROPERTIES = "update"
ACTION_DELETE = "delete"
ACTION_DELETE_TREE = "deleteTree"
ACTION_APPLY_ACL = "applyACL"
ACTION_APPLY_POLICY = "applyPolicy"
ACTION_REMOVE_POLICY = "removePolicy"
ACTION_QUERY = "query"

##########################################
############### PARAMETERS ###############
##########################################

PARAM_SELECTOR = "cmisselector"
PARAM_OBJECT_ID = "objectId"
PARAM_TYPE_ID = "typeId"
PARAM_DEPTH = "depth"
PARAM_PROPERTY_DEFINITIONS = "includePropertyDefinitions"
PARAM_MAX_ITEMS = "maxItems"
PARAM_SKIP_COUNT = "skipCount"
PARAM_FILTER = "filter"
PARAM_ALLOWABLE_ACTIONS = "includeAllowableActions"
PARAM_RELATIONSHIPS = "includeRelationships"
PARAM_RENDITION_FILTER = "renditionFilter"
PARAM_PATH_SEGMENT = "includePathSegment"
PARAM_RELATIVE_PATH_SEGMENT = "includeRelativePathSegment"
PARAM_POLICY_IDS = "includePolicyIds"
PARAM_ACL = "includeACL"
PARAM_SUCCINCT = "succinct"
PARAM_CHANGE_TOKEN = "changeToken"
PARAM_ALL_VERSIONS = "allVersions"
PARAM_UNFILE_OBJECTS = "unfileObjects"
PARAM_CONTINUE_ON_FAILURE = "continueOnFailure"
PARAM_STATEMENT = "statement"
PARAM_SEARCH_ALL_VERSIONS = "searchAllVersions"
PARAM_CHANGE_LOG_TOKEN = "changeLogToken"
PARAM_PROPERTIES = "includeProperties"
PARAM_ONLY_BASIC_PERMISSIONS = "onlyBasicPermissions"
PARAM_ACL_PROPAGATION = "ACLPropagation"
PARAM_POLICY_ID = "policyId"
PARAM_FOLDER_ID = "folderId"
PARAM_VERSIONING_STATE = "versioningState"
PARAM_REPOSITORY_ID = "repositoryId"

##########################################
################ ERRORS ##################
##########################################

ERROR_EXCEPTION = "exception"
ERROR_MESSAGE = "message"
ERROR_STACKTRACE = "stacktrace"
